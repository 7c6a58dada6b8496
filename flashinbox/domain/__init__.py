"""Domain layer: entities, value objects and pure domain services."""
