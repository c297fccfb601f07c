"""Output layer: result formatting and progress reporting."""
