"""
users-api: a minimal layered HTTP service for the User resource.

Application package root, laid out as ports & adapters.

Layers:
    - domain: Entities, ports (ABCs), errors. No framework imports.
    - application: The user service that orchestrates repository calls.
    - infrastructure: Adapters (SQLAlchemy, in-memory) implementing domain ports.
    - interfaces: FastAPI routers and Pydantic request/response schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
