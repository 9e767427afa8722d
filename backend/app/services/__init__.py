# Services package init
"""
Rephrase Backend: Services Layer
==================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - guards:          authentication guard and ownership resolver
    - SessionService:  create / update / list sessions
    - VariantService:  create / update / delete / list variants

Services take the database session and the caller identity as arguments
on every call, so they can be exercised without HTTP.
"""
