"""HTTP boundary of the CosmiBit API.

- **main**: Application factory and lifespan
- **routes**: Projects, services, team, contact and health endpoints
- **dependencies**: Per-request facade providers
- **middleware**: CORS companions, access policy, logging and error handling
- **schemas**: Request bodies and the error envelope
- **utils**: orjson response class
"""
