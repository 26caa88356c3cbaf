"""Text output for results."""
