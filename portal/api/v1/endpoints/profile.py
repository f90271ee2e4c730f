# portal/api/v1/endpoints/profile.py
from fastapi import APIRouter, Depends, File, UploadFile

from portal.core.deps import ensure_ok, require_role
from portal.schemas.profile import PasswordUpdate, ProfileUpdate
from portal.schemas.user import UserRole
from portal.services.sessions import PortalSession


def profile_router(role: UserRole) -> APIRouter:
    """The profile page, identical in every portal section."""
    router = APIRouter(tags=["profile"])
    guard = require_role(role)

    @router.get("/profile")
    async def get_profile(session: PortalSession = Depends(guard)):
        profile = session.store.profile
        await profile.get()
        ensure_ok(profile.state)
        return {"profile": profile.profile}

    @router.put("/profile")
    async def update_profile(body: ProfileUpdate, session: PortalSession = Depends(guard)):
        profile = session.store.profile
        updated = await profile.update(body)
        ensure_ok(profile.state)
        return {"message": "Profile updated", "profile": updated}

    @router.put("/profile/password")
    async def update_password(body: PasswordUpdate, session: PortalSession = Depends(guard)):
        profile = session.store.profile
        resp = await profile.update_password(body)
        ensure_ok(profile.state)
        return {"message": resp.message or "Password updated"}

    @router.post("/profile/image")
    async def upload_image(image: UploadFile = File(...), session: PortalSession = Depends(guard)):
        profile = session.store.profile
        content = await image.read()
        url = await profile.update_image(image.filename or "image", content, image.content_type)
        ensure_ok(profile.state)
        return {"profileImage": url}

    return router
