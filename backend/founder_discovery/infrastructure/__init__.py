"""Infrastructure Layer: database access, repositories and logging setup.

Invariants:
    - Infrastructure converts between ORM rows and core dataclasses
    - Core never imports from infrastructure
"""
