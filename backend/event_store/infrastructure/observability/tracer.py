"""
Event Store Tracing Service.

AWS X-Rayを使用した分散トレーシング機能を提供。
イベントの追加・読み出し・集約IDスキャンの
追跡と可視化を担当。
"""

from contextlib import contextmanager
from typing import Generator

from aws_lambda_powertools import Tracer


class TracingService:
    """
    X-Ray Tracingサービス.
    
    AWS Lambda Powertoolsを使用してトレースを収集。
    """
    
    def __init__(
        self,
        service: str = "EventStore",
        *,
        auto_patch: bool = True,
    ):
        """
        トレーシングサービスを初期化.
        
        Args:
            service: サービス名
            auto_patch: 自動パッチ有効化
        """
        self._tracer = Tracer(service=service, auto_patch=auto_patch)
        self._service = service
    
    @contextmanager
    def trace_store_operation(
        self,
        operation: str,
        table_name: str,
    ) -> Generator[None, None, None]:
        """
        イベントストア操作をトレース.
        
        Args:
            operation: 操作種別（append_event/get_events/get_aggregate_ids）
            table_name: テーブル名
            
        Yields:
            トレースコンテキスト
        """
        with self._tracer.provider.in_subsegment(f"event_store_{operation}") as subsegment:
            subsegment.put_annotation("operation", operation)
            subsegment.put_annotation("table_name", table_name)
            yield
