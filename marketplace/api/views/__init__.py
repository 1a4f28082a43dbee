from .prometheus_metrics import marketplace_prometheus_metrics
from .system_views import health, stats


__all__ = ["health", "stats", "marketplace_prometheus_metrics"]
