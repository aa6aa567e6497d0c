"""Mapping of domain exceptions to HTTP errors shared by the v1 endpoints."""

from fastapi import HTTPException, status

from client_compiler.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    SpreadsheetError,
)


def not_found(exc: EntityNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"code": exc.code, "message": str(exc)},
    )


def conflict(exc: DuplicateEntityError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={"code": exc.code, "message": str(exc)},
    )


def bad_spreadsheet(exc: SpreadsheetError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": exc.code, "message": exc.message},
    )
