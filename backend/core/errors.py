"""Error kinds raised by the importer and the create services."""


def driver_message(exc: Exception) -> str:
    """Prefer the DBAPI driver's own message over SQLAlchemy's wrapped text."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class ModelingError(Exception):
    """Base error; carries the HTTP status the API layer answers with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ModelingError):
    status_code = 400

    @classmethod
    def from_messages(cls, messages: list[str]) -> "ValidationError":
        return cls("; ".join(m for m in messages if m) or "Invalid request")


class UpstreamConnectionError(ModelingError):
    """Import target unreachable or credentials rejected."""

    def __init__(self, detail: str):
        super().__init__(f"Could not connect to database: {detail}")


class EmptyCatalogError(ModelingError):
    status_code = 400

    def __init__(self):
        super().__init__("No tables found in the target database")


class CatalogQueryError(ModelingError):
    def __init__(self, detail: str):
        super().__init__(f"Catalog query failed: {detail}")


class PersistenceError(ModelingError):
    def __init__(self, action: str, detail: str):
        super().__init__(f"{action} failed: {detail}")


class NotFoundAfterCreate(ModelingError):
    def __init__(self, entity: str):
        super().__init__(f"{entity} could not be loaded after creation")
