"""ORM Models — SQLAlchemy declarative models for users and messages.

Invariants:
    - All models inherit from Base (db/base.py)
    - Users are never deleted; messages reference them by username

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from messagely.models.user import User  # noqa: F401
from messagely.models.message import Message  # noqa: F401
