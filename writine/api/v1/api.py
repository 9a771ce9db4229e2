from fastapi import APIRouter

from writine.api.v1.endpoints import custom_domains, profile

api_router = APIRouter()
api_router.include_router(custom_domains.router, prefix="/domains", tags=["domains"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
