"""Console reporting."""
