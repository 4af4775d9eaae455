"""Domain layer - entities and pure simulation services."""
