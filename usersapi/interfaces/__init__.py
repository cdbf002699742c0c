"""
Interfaces layer package.

Contains FastAPI routers and Pydantic request/response schemas.
Routes call the user service and return responses.
"""
