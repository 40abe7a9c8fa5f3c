"""
catalog_stack.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
- Prometheus request metrics.
"""

# Package marker.
