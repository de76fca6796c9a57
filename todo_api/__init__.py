"""
ToDo List API: collaborative task management over REST.

Application package root. A modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - todo: User registration/login and task lifecycle management.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (database, password hashing, tokens) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, dependency wiring.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
