"""Application layer: use cases over the user domain."""
