"""Domain layer: models, services, ports and errors (no I/O)."""
