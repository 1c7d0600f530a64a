"""Route Modules — cards (owner), public (published pages + vCard), registry, health.

Invariants:
    - Each module owns one APIRouter; main.py includes them explicitly
    - Routes convert schemas to core values and hand them to CardService or render()
"""
