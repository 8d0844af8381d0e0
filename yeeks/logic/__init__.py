"""Core logic layer.

Subpackages:
- calendar: partitioning a year into clipped weeks and classifying them
- notes: the editing session over the note store (debounced saves)
"""
__all__ = ["calendar", "notes"]
