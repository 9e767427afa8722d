# Routes package init
"""
Rephrase Backend: API Routes Package
======================================

Route Inventory:
    - sessions.py:  POST  /api/rephrase/sessions
                    GET   /api/rephrase/sessions
                    PATCH /api/rephrase/sessions/{sessionId}
    - variants.py:  POST   /api/rephrase/sessions/{sessionId}/variants
                    GET    /api/rephrase/sessions/{sessionId}/variants
                    PATCH  /api/rephrase/sessions/{sessionId}/variants/{variantId}
                    DELETE /api/rephrase/sessions/{sessionId}/variants/{variantId}
    - health.py:    GET  /health

Routes stay thin: extract body, path and caller, call the service, return
its envelope.
"""
