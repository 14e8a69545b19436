"""API route handlers.

This module contains FastAPI routers for:
- Note endpoints
- JSON-only route matching
"""
