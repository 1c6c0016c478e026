"""Regression tests for decoreco."""
