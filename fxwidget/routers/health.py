from fastapi import APIRouter, Depends

from fxwidget.core.config import Settings
from fxwidget.core.dependencies import get_app_settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
async def health(settings: Settings = Depends(get_app_settings)):
    return {"status": "ok", "version": settings.version}
