"""Integration tests for decoreco."""
