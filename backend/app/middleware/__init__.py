# Middleware package init
"""
Rephrase Backend: Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Auth Context] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Auth Context: resolves the caller identity header into request.state.user
    3. Logging: logs method, path, status and duration with the request ID

    Responses travel back through the chain in reverse order.
"""
