"""Core — pure domain logic: errors, identity tokens, password hashing, id parsing.

Invariants:
    - Nothing in core performs database or network IO
    - Core never imports from api/, services/ or infrastructure/
"""
