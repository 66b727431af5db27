from fastapi import APIRouter, Depends

from chat_relay.core.settings import Settings
from chat_relay.dependencies import get_app_settings

router = APIRouter()


@router.get("/")
def root_health_check(settings: Settings = Depends(get_app_settings)) -> dict[str, str]:
    return {"status": "running", "service": settings.app_name}


@router.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
