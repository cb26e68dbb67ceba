"""Solution wheel: spin for a coping suggestion, or say what happened."""

__version__ = "1.0.0"
