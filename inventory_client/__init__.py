"""
Inventory client - reactive state for license inventory front ends.

This module handles:
- Resource stores mirroring applications, licenses and users
- Request lifecycle (loading/error) tracking
- License table query construction
- Modal and routing state
"""
