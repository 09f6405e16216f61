"""
News Archive API — Middleware Package
=======================================

Middleware Chain (order of execution on the way in):
    Request → [Request ID] → [Logging] → [Security Headers] → [GZip] → [CORS]
            → [Unhandled Errors] → Route

    - Request ID first, so every later log line carries the correlation ID
    - Logging sees the final status code and total duration
    - Security headers are applied to every response, errors included
    - Unhandled errors become a 500 inside the chain, so that response also
      carries the request ID and security headers
"""
