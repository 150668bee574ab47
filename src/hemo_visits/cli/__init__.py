"""CLI module for hemo-visits."""
