"""Domain layer: models and view types."""
