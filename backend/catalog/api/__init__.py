"""HTTP adapter over the catalog domain services."""
