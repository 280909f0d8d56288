"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions here are pure and deterministic; git and filesystem access
      goes through the GitBackend protocol implemented by the shell

Design Decisions:
    - Functional core separated from imperative shell
"""
