"""API Layer — owner card routes, public card routes, registry and health checks.

Invariants:
    - Owner routes take the caller from X-Owner-Id; public routes take no identity
    - Every failure leaves as the CardsmithError JSON envelope
"""
