"""
HTTP API for the Vid2Blog application.
"""
