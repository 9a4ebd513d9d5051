"""Qt item models bound to the pure-Python view-models."""
