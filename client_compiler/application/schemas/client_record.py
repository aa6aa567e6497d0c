"""Pydantic DTOs (Data Transfer Objects) for the ClientRecord feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class ClientRecordCreate(BaseModel):
    """Schema for creating (or validating) a client record.

    Values are accepted as free text; business rules are applied by the
    validation service and reported in ``errors`` rather than rejected here.
    """

    clave: str = Field("", max_length=255, examples=["1001"])
    nombre: str = Field("", max_length=255, examples=["Juan Pérez García"])
    correo: str = Field("", max_length=255, examples=["juan.perez@gmail.com"])
    telefono: str = Field("", max_length=255, examples=["961-123-4567"])


class ClientRecordUpdate(BaseModel):
    """Schema for updating an existing client record; omitted fields keep their value."""

    clave: str | None = Field(None, max_length=255)
    nombre: str | None = Field(None, max_length=255)
    correo: str | None = Field(None, max_length=255)
    telefono: str | None = Field(None, max_length=255)


class ClientRecordResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    clave: str
    nombre: str
    correo: str
    telefono: str
    errors: dict[str, str]
    is_valid: bool
    row_number: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientListResponse(BaseModel):
    clients: list[ClientRecordResponse]
    total: int = Field(..., description="Number of records matching the filters")
    page: int
    limit: int


class ClientSearchResponse(BaseModel):
    clients: list[ClientRecordResponse]
    total: int
    search_term: str


class ClientStatsResponse(BaseModel):
    total: int
    valid: int
    invalid: int
    errors_by_field: dict[str, int]

    model_config = {"from_attributes": True}


class ValidationResultResponse(BaseModel):
    """Result of revalidating every stored record."""

    clients: list[ClientRecordResponse]
    stats: ClientStatsResponse
