"""Services Layer — the git-backed attempt recorder.

Invariants:
    - Writer, orchestrator, and reader each own one operation
    - AttemptRecorder is the only entry point used by the API layer

Design Decisions:
    - Config and GitBackend injected through constructors (ADR: no hidden global state)
"""
