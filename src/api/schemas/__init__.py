"""Pydantic schema models for API request/response validation.

- **contact**: Contact form request and confirmation bodies
- **errors**: The error envelope shared by every non-2xx response

Entity responses use the domain models directly.
"""
