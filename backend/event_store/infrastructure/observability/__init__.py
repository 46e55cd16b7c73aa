"""
Observability Infrastructure.

AWS Lambda Powertools を活用した
イベントストア操作のトレース・メトリクス収集機能を提供。
"""

from .metrics import MetricsService, StoreOperationMetrics
from .tracer import TracingService

__all__ = [
    "MetricsService",
    "StoreOperationMetrics",
    "TracingService",
]
