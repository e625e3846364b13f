"""Services Layer — store adapters and the engines that orchestrate them.

Invariants:
    - Store adapters (worker_directory, order_ledger) are bound to one AsyncSession
    - Engines own a DatabaseSessionManager and open one session per unit of work
    - Business rules are delegated to core/ pure functions
"""
