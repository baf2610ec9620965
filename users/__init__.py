"""
Users module - people licenses are assigned to.
"""
