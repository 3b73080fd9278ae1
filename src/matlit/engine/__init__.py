"""Value classification, literal formatting, and response helpers."""
