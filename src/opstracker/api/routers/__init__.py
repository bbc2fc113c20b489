"""Tracker API routers."""
