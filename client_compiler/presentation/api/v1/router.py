"""V1 API router, aggregating all v1 endpoint routers."""

from fastapi import APIRouter

from client_compiler.presentation.api.v1.endpoints.clients import router as clients_router
from client_compiler.presentation.api.v1.endpoints.health import router as health_router
from client_compiler.presentation.api.v1.endpoints.reports import router as reports_router
from client_compiler.presentation.api.v1.endpoints.uploads import router as uploads_router
from client_compiler.presentation.api.v1.endpoints.validation import router as validation_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(uploads_router)
router.include_router(clients_router)
router.include_router(validation_router)
router.include_router(reports_router)
