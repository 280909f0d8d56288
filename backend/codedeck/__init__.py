"""CodeDeck Application Package — coding-practice flashcards with a git trail of every attempt.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
