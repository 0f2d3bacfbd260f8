"""Repository core for SVCS."""
