"""Client record endpoints: listing, search and CRUD over the in-memory store."""

from fastapi import APIRouter, Depends, Query, status

from client_compiler.application.schemas.client_record import (
    ClientListResponse,
    ClientRecordCreate,
    ClientRecordResponse,
    ClientRecordUpdate,
    ClientSearchResponse,
)
from client_compiler.application.services import ClientRecordService
from client_compiler.domain.entities import ClientFilter, ClientRecord
from client_compiler.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from client_compiler.infrastructure.dependencies import get_client_record_service
from client_compiler.presentation.api.v1.errors import conflict, not_found

router = APIRouter(prefix="/clients", tags=["Clients"])


def _to_response(record: ClientRecord) -> ClientRecordResponse:
    return ClientRecordResponse.model_validate(record, from_attributes=True)


@router.get("", response_model=ClientListResponse)
async def list_clients(
    clave: str = Query("", description="Substring of the client key"),
    nombre: str = Query("", description="Substring of the name"),
    correo: str = Query("", description="Substring of the email"),
    telefono: str = Query("", description="Substring of the phone"),
    has_errors: bool | None = Query(None, description="Only invalid (true) or valid (false) records"),
    page: int = Query(0, ge=0, description="1-based page; 0 disables pagination"),
    limit: int = Query(0, ge=0, le=1000, description="Page size; 0 disables pagination"),
    service: ClientRecordService = Depends(get_client_record_service),
) -> ClientListResponse:
    """Retrieve a filtered, optionally paginated list of clients."""
    record_filter = ClientFilter(
        clave=clave,
        nombre=nombre,
        correo=correo,
        telefono=telefono,
        has_errors=has_errors,
        page=page,
        limit=limit,
    )
    records, total = await service.list_records(record_filter)
    return ClientListResponse(
        clients=[_to_response(r) for r in records],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/search", response_model=ClientSearchResponse)
async def search_clients(
    q: str = Query(..., min_length=1, description="Text searched in every field"),
    service: ClientRecordService = Depends(get_client_record_service),
) -> ClientSearchResponse:
    records = await service.search(q)
    return ClientSearchResponse(
        clients=[_to_response(r) for r in records],
        total=len(records),
        search_term=q,
    )


@router.get("/duplicates", response_model=dict[str, list[int]])
async def duplicate_keys(
    service: ClientRecordService = Depends(get_client_record_service),
) -> dict[str, list[int]]:
    """Keys held by more than one stored client, mapped to their ids."""
    return await service.get_duplicate_keys()


@router.get("/{record_id}", response_model=ClientRecordResponse)
async def get_client(
    record_id: int,
    service: ClientRecordService = Depends(get_client_record_service),
) -> ClientRecordResponse:
    try:
        record = await service.get_record(record_id)
    except EntityNotFoundError as e:
        raise not_found(e)
    return _to_response(record)


@router.post("", response_model=ClientRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientRecordCreate,
    service: ClientRecordService = Depends(get_client_record_service),
) -> ClientRecordResponse:
    """Validate and store a new client; the key must not be in use."""
    try:
        record = await service.create_record(data)
    except DuplicateEntityError as e:
        raise conflict(e)
    return _to_response(record)


@router.put("/{record_id}", response_model=ClientRecordResponse)
async def update_client(
    record_id: int,
    data: ClientRecordUpdate,
    service: ClientRecordService = Depends(get_client_record_service),
) -> ClientRecordResponse:
    """Update a client and revalidate it."""
    try:
        record = await service.update_record(record_id, data)
    except EntityNotFoundError as e:
        raise not_found(e)
    except DuplicateEntityError as e:
        raise conflict(e)
    return _to_response(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    record_id: int,
    service: ClientRecordService = Depends(get_client_record_service),
) -> None:
    try:
        await service.delete_record(record_id)
    except EntityNotFoundError as e:
        raise not_found(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_clients(
    service: ClientRecordService = Depends(get_client_record_service),
) -> None:
    """Remove every stored client."""
    await service.clear_records()
