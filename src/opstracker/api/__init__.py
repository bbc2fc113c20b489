"""OpsTracker API - FastAPI application and routers."""
