"""API helpers shared across apps."""
