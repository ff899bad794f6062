"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (user input, API responses)
    - Enum fields reuse core domain types so the wire values stay in one place

Design Decisions:
    - Separate from models and entities: schemas are API contracts, models are
      persistence, entities are what the engine reasons about
"""
