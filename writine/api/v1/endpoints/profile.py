"""
Profile API: the tenant's handle, which doubles as the reserved subdomain
{handle}.writine.com.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from writine.api import deps
from writine.config import settings
from writine.crud import crud_tenant
from writine.models.tenant import Tenant
from writine.schemas.profile import HandleUpdate, ProfileInfo
from writine.services.errors import HandleTaken, InvalidHandle
from writine.services.hostnames import normalize_handle, validate_handle
from writine.services.subscription import get_plan_feature, get_upgrade_suggestion

router = APIRouter()
logger = logging.getLogger("writine.profile")


def _to_info(db: Session, tenant: Tenant) -> ProfileInfo:
    subscription = crud_tenant.get_active_subscription(db, tenant.id)
    plan = subscription.plan if subscription else "free"
    blog_url = f"https://{tenant.handle}.{settings.PLATFORM_APEX_DOMAIN}" if tenant.handle else None
    return ProfileInfo(
        id=tenant.id,
        handle=tenant.handle,
        display_name=tenant.display_name,
        blog_url=blog_url,
        plan=plan,
        shows_branding=not get_plan_feature(plan, "remove_branding"),
        upgrade_hint=get_upgrade_suggestion(plan, "remove_branding"),
    )


@router.get("/", response_model=ProfileInfo)
def read_profile(
    db: Session = Depends(deps.get_db),
    current_tenant: Tenant = Depends(deps.get_current_tenant),
) -> Any:
    return _to_info(db, current_tenant)


@router.put("/handle", response_model=ProfileInfo)
def update_handle(
    body: HandleUpdate,
    db: Session = Depends(deps.get_db),
    current_tenant: Tenant = Depends(deps.get_current_tenant),
) -> Any:
    """Set or change the handle. Reserved labels (www, api, dashboard ...) are refused."""
    handle = normalize_handle(body.handle)
    try:
        validate_handle(handle, settings.reserved_subdomains)
        tenant = crud_tenant.set_handle(db, db_obj=current_tenant, handle=handle)
    except InvalidHandle as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HandleTaken:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This handle is already taken")

    logger.info("Tenant %s now uses handle %s", tenant.id, handle)
    return _to_info(db, tenant)
