"""Services: the imperative shell that feeds snapshots to the pure core.

Invariants:
    - Services own the transaction (commit); repositories only flush
    - Business rules live in core/; services load, call, persist

Design Decisions:
    - One DiscoveryService per request, built from the request's DB session
"""
