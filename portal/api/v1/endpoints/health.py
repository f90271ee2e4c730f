from fastapi import APIRouter

from portal.core.config import settings

router = APIRouter()


@router.get("/", summary="Portal health")
async def portal_health():
    # the upstream API is not probed; this only says the portal process is up
    return {"status": "ok", "app": settings.APP_NAME, "env": settings.ENV, "upstream": settings.API_BASE_URL}
