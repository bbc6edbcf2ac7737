"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Users are kept
in process memory by ``UserService``; swapping it for a database backed
implementation would not require changes to the API handlers.
"""
