"""
License Inventory Django project.
"""
