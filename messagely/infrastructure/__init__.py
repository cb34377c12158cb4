"""Infrastructure Layer — database, hashing, logging and other cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic beyond errors and types
    - All store failures mapped to typed errors before leaving this layer

Design Decisions:
    - Thin wrappers over third-party clients (SQLAlchemy, passlib) with error mapping
"""
