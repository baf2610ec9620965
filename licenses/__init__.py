"""
Licenses module - license records and their associations.

This module handles:
- License entity and domain logic
- Application license counts and user assignments
- Filtered, searched and sorted license queries
"""
