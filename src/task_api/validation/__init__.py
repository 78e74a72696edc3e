"""
Validation module for the Task Management API
Contains the create and update validators for task payloads
"""
from .task_rules import ValidationResult, validate_create, validate_update

__all__ = [
    "ValidationResult",
    "validate_create",
    "validate_update",
]
