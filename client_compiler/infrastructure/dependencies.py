"""FastAPI dependency injection: wires infrastructure to the application layer.

Long-lived collaborators (settings, record store, validation service,
spreadsheet adapter, file storage) are created once by ``create_app`` and
kept on ``app.state``; these providers hand them to the endpoints.
"""

import asyncio
from collections.abc import AsyncGenerator

from fastapi import Request

from client_compiler.application.services import ClientRecordService, ValidationService
from client_compiler.config import Settings
from client_compiler.infrastructure.memory import InMemoryClientRecordRepository
from client_compiler.infrastructure.spreadsheets import OpenpyxlClientSpreadsheet
from client_compiler.infrastructure.storage.local_file_storage import LocalFileStorage


def init_app_state(state, settings: Settings) -> None:
    """Create the process-wide collaborators for one application instance."""
    state.settings = settings
    state.client_repository = InMemoryClientRecordRepository()
    state.validation_service = ValidationService(
        batch_threshold=settings.validation_batch_threshold,
        max_workers=settings.validation_workers,
    )
    state.spreadsheet = OpenpyxlClientSpreadsheet()
    state.file_storage = LocalFileStorage(upload_dir=settings.upload_dir)
    state.write_lock = asyncio.Lock()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_file_storage(request: Request) -> LocalFileStorage:
    return request.app.state.file_storage


async def get_client_record_service(
    request: Request,
) -> AsyncGenerator[ClientRecordService, None]:
    """Provides a ClientRecordService bound to the application's record store."""
    state = request.app.state
    yield ClientRecordService(
        repository=state.client_repository,
        validation_service=state.validation_service,
        spreadsheet=state.spreadsheet,
        write_lock=state.write_lock,
    )
