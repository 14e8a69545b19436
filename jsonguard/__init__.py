"""JSON Guard Service Application Package.

This package contains the core application components:
- models: Pydantic models for request/response validation
- routers: API route handlers and the JSON-only route class
- services: Note storage
- utils: The JSON body guard, validation and mapping helpers
"""

__version__ = "0.1.0"
