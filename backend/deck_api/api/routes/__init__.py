"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to services/)
    - Id path segments are taken as text and parsed by parse_resource_id (400 on junk)
    - Mutating routes declare get_current_user first, so 401 precedes any other work

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
