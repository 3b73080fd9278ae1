"""Input loading and output file operations."""
