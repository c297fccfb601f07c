"""Service layer: batch orchestration and the progress protocol."""
