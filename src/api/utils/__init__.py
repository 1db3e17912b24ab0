"""Utility modules for API-specific functionality.

- **responses**: JSON response class using orjson
"""
