"""System-level helpers."""
