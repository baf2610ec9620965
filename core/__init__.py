"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions and value objects
- Infrastructure abstractions (cache, transactions)
- Middleware components
- Health, readiness and metrics views
"""
