"""layerctl — breadth-first layering of undirected graphs."""

__version__ = "0.1.0"
