"""Runtime services: telemetry and environment-driven settings."""
