"""
Core app - Shared abstractions and utilities.

This app provides platform-agnostic interfaces for:
- Entity storage (EntityStoreInterface)
- Domain error taxonomy shared by every app
- Input validation helpers for the service layer

These abstractions allow switching between:
- Django ORM storage (default, any configured database)
- In-memory storage (tests, demos)
"""
