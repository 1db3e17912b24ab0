"""Infrastructure layer for data persistence.

This package holds the concrete document store integration the domain
layer depends on:

- **Database access**: Async MongoDB through PyMongo
- **Repository pattern**: One generic repository for all collections
- **Connection management**: Lazy client creation, health checks, shutdown
"""
