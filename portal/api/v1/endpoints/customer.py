from fastapi import APIRouter, Depends

from portal.core.deps import require_role
from portal.services.sessions import PortalSession

router = APIRouter(tags=["customer"])
customer_only = require_role("customer")


@router.get("/dashboard")
async def dashboard(session: PortalSession = Depends(customer_only)):
    return {"user": session.user}
