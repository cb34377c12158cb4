"""Services Layer — credential store, message store and session issuer.

Invariants:
    - Stores receive an AsyncSession per request; they hold no state between requests
    - Every SQLAlchemy failure leaves a store as a typed MessagelyError

Design Decisions:
    - One class per component, constructed by api/dependencies.py
"""
