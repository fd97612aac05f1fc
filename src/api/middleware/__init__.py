"""FastAPI middleware and exception handlers.

- **RequestContextMiddleware**: correlation ID per request
- **RequestLoggingMiddleware**: request timing and slow request warnings
- **error_handler**: maps service errors to HTTP status codes and the
  uniform ``ErrorResponse`` envelope

Middleware run in reverse order of registration: the request context is
registered last so the correlation ID is bound before request logging runs.
"""
