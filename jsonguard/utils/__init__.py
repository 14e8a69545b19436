"""Utility functions and helpers.

This module contains utility classes and functions for:
- Guarding JSON request bodies
- Validation error formatting
- Mapping between resource types
"""
