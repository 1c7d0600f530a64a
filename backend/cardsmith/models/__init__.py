"""ORM Models — SQLAlchemy declarative models for profiles, cards and social links.

Invariants:
    - All models inherit from Base (db/base.py)
    - BusinessCard owns its SocialLink rows (cascade delete)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from cardsmith.models.profile import Profile  # noqa: F401
from cardsmith.models.business_card import BusinessCard  # noqa: F401
from cardsmith.models.social_link import SocialLink  # noqa: F401
