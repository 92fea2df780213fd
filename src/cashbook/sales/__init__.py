"""Daily sales record storage."""
