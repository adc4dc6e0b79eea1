"""Services — resource handlers composed over an injected AsyncSession.

Invariants:
    - Handlers receive their session in the constructor; none reach for a global client
    - Each mutating operation commits exactly once, at its end
    - Handlers return response schemas built while the session is still open
"""
