"""
API router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.admin import router as admin_router
from api.v1.public import router as public_router
from api.v1.votes import router as votes_router

router = APIRouter()

router.include_router(public_router, prefix="/public", tags=["Public"])
router.include_router(votes_router, prefix="/vote", tags=["Votes"])
router.include_router(admin_router, prefix="/admin", tags=["Admin"])
