"""FastAPI middleware for cross-cutting request/response concerns.

- **AccessPolicyMiddleware**: Ordered route allow-list, 401 otherwise
- **SecurityHeadersMiddleware**: Browser security headers
- **RequestContextMiddleware**: Correlation IDs and request context
- **RequestLoggingMiddleware**: Structured logging with timing
- **error_handler**: Exception handlers producing the error envelope

Order from the outside in: CORS, security headers, request context,
request logging, access policy. CORS answers preflight requests before
the access policy sees them.
"""
