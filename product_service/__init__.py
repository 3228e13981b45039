"""Product service: read-only product catalog queries."""

__version__ = "0.1.0"
