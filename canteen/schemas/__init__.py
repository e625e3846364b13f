"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (kiosk input, admin input, responses)
    - Domain enums from core/ are the target types of every token field

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
