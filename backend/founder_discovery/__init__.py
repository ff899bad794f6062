"""Founder Discovery Package: customer-discovery tracking and stage gating.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
