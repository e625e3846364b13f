"""Canteen Application Package — meal voucher intake and consumption reports.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
