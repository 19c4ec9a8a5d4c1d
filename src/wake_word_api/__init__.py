"""Wake word training data API."""
