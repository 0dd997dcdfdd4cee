class RelayError(Exception):
    """Base error carrying the HTTP status and the user-facing message."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class MissingSenderError(RelayError):
    status_code = 400

    def __init__(self, message: str = "Número não encontrado"):
        super().__init__(message)


class EmptyMessageError(RelayError):
    status_code = 400

    def __init__(self, message: str = "Mensagem vazia"):
        super().__init__(message)


class UnknownTenantError(RelayError):
    status_code = 401

    def __init__(self, message: str = "Bot não reconhecido"):
        super().__init__(message)


class AuthError(RelayError):
    status_code = 401


class UpstreamTransportError(RelayError):
    """Automation engine or gateway could not be reached."""

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(message)


class PersistenceError(RelayError):
    pass
