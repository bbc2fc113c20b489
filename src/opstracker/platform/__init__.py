"""OpsTracker Platform - configuration and logging."""
