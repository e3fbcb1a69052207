"""Core detection modules."""
