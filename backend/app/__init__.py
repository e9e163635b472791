"""TestForge backend application."""
