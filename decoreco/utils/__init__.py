"""Shared utilities for decoreco."""
