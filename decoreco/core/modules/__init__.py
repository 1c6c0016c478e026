"""
Modular components for the decoreco pipeline.
"""
