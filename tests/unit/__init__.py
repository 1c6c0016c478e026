"""Unit tests for decoreco."""
