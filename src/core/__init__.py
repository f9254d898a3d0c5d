"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the ledger that are
independent of the operation handlers (transfer, supply, permit).
"""
