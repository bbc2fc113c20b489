"""
OpsTracker - Operational checklist tracking for a fixed team and quarter

This package contains the tracker backend:
- engine: Calendar config, record schema, path mutation, progress, alerts
- storage: Blob store adapters (in-memory, SQLAlchemy) and the state codec
- api: FastAPI REST endpoints
- platform: Cross-cutting concerns (configuration, logging)
"""

__version__ = "0.1.0"
