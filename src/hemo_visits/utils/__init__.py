"""Utility helpers shared across hemo-visits modules."""
