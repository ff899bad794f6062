"""Core Layer: pure discovery rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic
    - Inputs are never mutated; lifecycle helpers return new snapshots

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
