"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes hold no git or filesystem logic: the recorder does that work

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
