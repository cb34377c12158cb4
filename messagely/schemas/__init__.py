"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - No schema ever carries a password hash

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Stores return schemas, not ORM rows: callers never see persistence state
"""
