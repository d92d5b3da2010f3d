"""Infrastructure concerns shared by the engine and its surfaces."""
