"""CosmiBit - backend for a software studio's portfolio website.

Serves read-only content (projects, services, team members) and accepts
contact form submissions, backed by MongoDB.

Layers:
- **api**: FastAPI routes, middleware and the error envelope
- **core**: Configuration, logging, tracing and the exception hierarchy
- **domain**: Entities, contact rules and per-resource facades
- **infrastructure**: MongoDB client and the generic document repository
"""
