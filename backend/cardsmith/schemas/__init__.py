"""Pydantic Schemas — the JSON contract of the card editor and public pages.

Invariants:
    - Request models validate enumerated options before any core call
    - Response models are built from LoadedCard; core never imports schemas
"""
