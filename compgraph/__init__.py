"""compgraph: component dependency graph discovery for integration platforms."""

__version__ = "0.1.0"
