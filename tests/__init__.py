"""
Test suite for wad-ledger

Contains:
- tests/unit/          : Unit tests for individual modules and Token scenarios
"""
