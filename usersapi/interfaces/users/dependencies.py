"""
Dependency injection for the users context.

The service is built once by the server and attached to the
application state; routes receive it through FastAPI's Depends.
"""

from fastapi import Request

from usersapi.application.users.user_service import UserService


def get_user_service(request: Request) -> UserService:
    """Return the UserService wired into this application."""
    return request.app.state.user_service
