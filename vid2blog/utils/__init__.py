"""
Utilities shared across the Vid2Blog application.
"""
