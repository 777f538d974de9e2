"""Assessment Report Service - HTTP API package."""
