"""Script manifest commands."""
