class ServiceError(Exception):
    """
    Base class for failures raised by the service layer.

    Each subclass carries the HTTP status and a short machine-readable kind;
    the routers never build error payloads themselves, app.main maps these.
    """
    status_code = 500
    kind = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "error": self.kind}


class ValidationFailedError(ServiceError):
    status_code = 400
    kind = "validation"


class ConflictError(ServiceError):
    status_code = 400
    kind = "conflict"


class NotFoundError(ServiceError):
    status_code = 404
    kind = "not_found"


class InternalError(ServiceError):
    status_code = 500
    kind = "internal"
