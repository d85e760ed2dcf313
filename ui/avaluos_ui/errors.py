class DocumentosError(Exception):
    """Error base del tablero; el mensaje se muestra tal cual al usuario."""


class ValidationError(DocumentosError):
    pass


class AuthError(DocumentosError):
    pass


class StorageError(DocumentosError):
    pass


class UpdateError(DocumentosError):
    pass


class QueryError(DocumentosError):
    pass
