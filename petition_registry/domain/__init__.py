"""Domain layer for the petition registry: models, errors, pure services."""
