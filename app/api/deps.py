from fastapi import Request

from app.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    """
    Settings the running app was built with.

    Usage:
        @router.post("/items")
        async def create_item(settings: Settings = Depends(get_app_settings)):
            ...
    """
    return request.app.state.settings
