"""Domain layer: errors shared across the catalog service."""
