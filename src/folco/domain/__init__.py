"""Domain layer: profile model, source resolution, error taxonomy."""
