"""
Event Store Metrics Service.

イベントストア操作に関するメトリクスの収集と
CloudWatchへの送信を担当。
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from aws_lambda_powertools import Metrics
from aws_lambda_powertools.metrics import MetricUnit


@dataclass
class StoreOperationMetrics:
    """イベントストア操作メトリクス."""
    
    operation: str
    table_name: str
    
    # 件数
    events_appended: int = 0
    events_read: int = 0
    pages_fetched: int = 0
    aggregate_ids_scanned: int = 0
    
    # レイテンシ
    latency_ms: float = 0.0
    
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class MetricsService:
    """
    CloudWatch Metricsサービス.
    
    AWS Lambda Powertoolsを使用してメトリクスを収集・送信。
    """
    
    def __init__(
        self,
        namespace: str = "EventStore",
        service: str = "EventStore",
    ):
        """
        メトリクスサービスを初期化.
        
        Args:
            namespace: CloudWatch名前空間
            service: サービス名
        """
        self._metrics = Metrics(namespace=namespace, service=service)
        self._namespace = namespace
        self._service = service
    
    def record_store_operation(
        self,
        metrics: StoreOperationMetrics,
    ) -> None:
        """
        イベントストア操作メトリクスを記録し、即座にEMF形式で出力.
        
        Powertools の Metrics はディメンションを呼び出し間で共有するため、
        テーブルごとのディメンションが混ざらないよう操作単位でフラッシュする。
        
        Args:
            metrics: 操作メトリクス
        """
        values: list[tuple[str, MetricUnit, float]] = []
        
        if metrics.events_appended > 0:
            values.append(("EventsAppended", MetricUnit.Count, metrics.events_appended))
        
        if metrics.pages_fetched > 0:
            values.append(("PagesFetched", MetricUnit.Count, metrics.pages_fetched))
            values.append(("EventsRead", MetricUnit.Count, metrics.events_read))
        
        if metrics.aggregate_ids_scanned > 0:
            values.append(
                ("AggregateIdsScanned", MetricUnit.Count, metrics.aggregate_ids_scanned)
            )
        
        # レイテンシ
        if metrics.latency_ms > 0:
            values.append(("OperationLatency", MetricUnit.Milliseconds, metrics.latency_ms))
        
        if not values:
            return
        
        self._metrics.add_dimension(name="TableName", value=metrics.table_name)
        for name, unit, value in values:
            self._metrics.add_metric(name=name, unit=unit, value=value)
        self._metrics.flush_metrics()
