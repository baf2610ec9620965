"""
Applications module - the software products licenses are bought for.

This module handles:
- Application entity and domain logic
- Application repository (port)
- Application infrastructure (Django ORM adapters)
- Create, update and delete commands
"""
