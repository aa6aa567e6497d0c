"""Field validation rules for client records. Pure functions, no state.

Every ``validate_*`` function returns ``None`` when the value is acceptable
and a user-facing (Spanish) error message otherwise.
"""

import re

ALLOWED_EMAIL_DOMAINS: tuple[str, ...] = (
    "@gmail.com",
    "@hotmail.com",
    "@outlook.com",
    "@yahoo.com",
    "@live.com",
    "@icloud.com",
    "@msn.com",
)

# Chiapas area codes (lada)
ALLOWED_AREA_CODES: tuple[str, ...] = (
    "916", "917", "918", "919", "932", "934",
    "961", "962", "963", "964", "965", "966",
    "967", "968", "992", "994",
)

MIN_PHONE_DIGITS = 10

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_NAME_RE = re.compile(r"[a-zA-ZáéíóúÁÉÍÓÚñÑ\s.'-]+")
_DIGIT_RE = re.compile(r"[0-9]")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_string(value: str) -> str:
    """Trim and collapse runs of whitespace into a single space."""
    return _WHITESPACE_RE.sub(" ", value.strip())


def validate_client_key(clave: str) -> str | None:
    clave = clave.strip()
    if not clave:
        return "La clave no puede estar vacía"
    if not _INTEGER_RE.fullmatch(clave):
        return "La clave debe ser un número válido"
    return None


def validate_client_name(nombre: str) -> str | None:
    nombre = nombre.strip()
    if not nombre:
        return "El nombre no puede estar vacío"
    if not _NAME_RE.fullmatch(nombre):
        return (
            "El nombre solo puede contener letras, espacios y caracteres "
            "especiales básicos"
        )
    if _DIGIT_RE.search(nombre):
        return "El nombre no puede contener números"
    return None


def validate_email(correo: str) -> str | None:
    correo = correo.strip().lower()
    if not correo:
        return "El correo no puede estar vacío"
    if not _EMAIL_RE.fullmatch(correo):
        return "El formato del correo electrónico no es válido"
    if not correo.endswith(ALLOWED_EMAIL_DOMAINS):
        allowed = ", ".join(domain.lstrip("@") for domain in ALLOWED_EMAIL_DOMAINS)
        return f"El dominio del correo no está permitido. Use: {allowed}"
    return None


def validate_phone(telefono: str) -> str | None:
    telefono = telefono.strip()
    if not telefono:
        return "El teléfono no puede estar vacío"

    digits = _NON_DIGIT_RE.sub("", telefono)
    if not digits:
        return "El teléfono solo puede contener números"
    if len(digits) < MIN_PHONE_DIGITS:
        return f"El teléfono debe tener al menos {MIN_PHONE_DIGITS} dígitos"
    if digits[:3] not in ALLOWED_AREA_CODES:
        return (
            "La lada del teléfono no es válida para Chiapas. Ladas permitidas: "
            + ", ".join(ALLOWED_AREA_CODES)
        )
    return None
