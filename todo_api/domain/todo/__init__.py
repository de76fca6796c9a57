"""
ToDo bounded context, domain layer.

This module contains all domain logic for the todo context:
- Users and their credentials
- Tasks and their status lifecycle
- The error taxonomy shared by every layer
"""
