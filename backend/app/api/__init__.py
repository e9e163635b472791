"""API routers for the TestForge backend."""
