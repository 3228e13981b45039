"""HTTP layer for the product service."""
