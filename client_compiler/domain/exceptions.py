"""Domain-specific exceptions, framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    code = "CLIENT_NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to store an entity whose unique key is taken."""

    code = "DUPLICATE_CLIENT_KEY"

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class SpreadsheetError(Exception):
    """Base class for problems with an uploaded or exported spreadsheet.

    Raised before any record is materialized, so ingestion is all-or-nothing.
    """

    code = "SPREADSHEET_ERROR"
    default_message = "Error en el archivo"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFileFormatError(SpreadsheetError):
    code = "INVALID_FILE_FORMAT"
    default_message = "Formato de archivo inválido. Solo se permiten archivos Excel (.xlsx)"


class FileEmptyError(SpreadsheetError):
    code = "FILE_EMPTY"
    default_message = "El archivo está vacío"


class InvalidStructureError(SpreadsheetError):
    code = "INVALID_EXCEL_STRUCTURE"
    default_message = "La estructura del archivo Excel no es válida"


class FileProcessingError(SpreadsheetError):
    """Wraps an underlying I/O or parsing failure."""

    code = "FILE_PROCESSING_ERROR"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Error procesando archivo: {detail}")
