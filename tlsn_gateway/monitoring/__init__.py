from .metrics_exporter import MetricsRegistry, get_registry, CONTENT_TYPE

__all__ = ["MetricsRegistry", "get_registry", "CONTENT_TYPE"]
