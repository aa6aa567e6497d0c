"""Top-level API router, including versioned sub-routers."""

from fastapi import APIRouter

from client_compiler.presentation.api.v1.router import router as v1_router

router = APIRouter(prefix="/api")
router.include_router(v1_router)
