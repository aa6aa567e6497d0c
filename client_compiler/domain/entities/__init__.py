from .client_record import ClientFilter, ClientRecord, ClientStats

__all__ = [
    "ClientRecord",
    "ClientFilter",
    "ClientStats",
]
