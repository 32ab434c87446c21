"""API router and endpoint organization."""

from fastapi import APIRouter

from brandshift.api.endpoints import ai, brands, projects

router = APIRouter(prefix="/api")

router.include_router(brands.router, prefix="/brands", tags=["Brands"])
router.include_router(ai.router, prefix="/ai", tags=["AI Generation"])
router.include_router(projects.router, prefix="/projects", tags=["Projects"])
