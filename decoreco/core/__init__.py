"""
Core functionality for decoreco.
"""
