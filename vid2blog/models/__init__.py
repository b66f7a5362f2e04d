"""
Data models shared by the pipeline stages and the API.
"""
