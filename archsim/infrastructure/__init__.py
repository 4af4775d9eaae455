"""Infrastructure layer - configuration, observability and the HTTP API."""
