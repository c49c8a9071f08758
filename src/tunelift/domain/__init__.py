"""Domain layer - playlist export, library access and release checks."""
