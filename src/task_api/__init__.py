"""
Task Management API
A REST API for creating, listing, updating and deleting tasks
"""
__version__ = "1.0.0"
