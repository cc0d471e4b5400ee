"""FastAPI dependencies shared by the route modules."""

from fastapi import Request

from personal_logger.services.storage_engine import StorageEngine


def get_storage(request: Request) -> StorageEngine:
    """
    The StorageEngine owned by the running app.

    Usage in a route:
        @router.get("/entries")
        async def list_entries(storage: StorageEngine = Depends(get_storage)):
            return await storage.list_recent()
    """
    return request.app.state.storage
