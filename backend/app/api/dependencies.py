"""
app/api/dependencies.py
───────────────────────
FastAPI dependency functions shared across all endpoints.

The coordinator (and the query cache it owns) is built once in the app
lifespan and stored on ``app.state``; views receive it by reference.

Usage
-----
    from app.api.dependencies import get_coordinator

    @router.get("/foo")
    async def my_route(coordinator = Depends(get_coordinator)):
        ...
"""

from fastapi import Request

from data_engine.coordinator import DataCoordinator


def get_coordinator(request: Request) -> DataCoordinator:
    """
    FastAPI dependency that returns the process-wide ``DataCoordinator``.

    Inject via ``Depends(get_coordinator)`` in any route handler.

    Returns:
        The coordinator created during application startup.
    """
    return request.app.state.coordinator
