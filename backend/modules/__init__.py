"""
Feature modules for the Chatter backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for entities and payloads
- repository.py: Store access and the module's EntityKind
- service.py: Business logic implementation
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
The GraphQL layer in api/ only ever sees the interfaces.
"""
