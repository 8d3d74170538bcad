from .constants import ERROR_MESSAGES


class FileStorageError(Exception):
    """Base class for errors raised by the wrapper itself"""

    code = 'INTERNAL_ERROR'

    def __init__(self, message: str = None, **params):
        if message is None:
            message = ERROR_MESSAGES.get(self.code, self.code).format(**params)
        super().__init__(message)


class ConfigurationError(FileStorageError):
    code = 'MISSING_CREDENTIALS'


class NotInitializedError(ConfigurationError):
    code = 'NOT_INITIALIZED'


class ValidationError(FileStorageError, ValueError):
    code = 'FILE_TOO_LARGE'


class UnsupportedInputError(FileStorageError, TypeError):
    code = 'UNSUPPORTED_TYPE'


class InsufficientAllowanceError(FileStorageError):
    code = 'INSUFFICIENT_ALLOWANCE'


class PieceNotFoundError(FileStorageError):
    """Raised by network adapters that can tell a missing piece apart"""

    code = 'PIECE_NOT_FOUND'

    def __init__(self, piece_cid: str):
        self.piece_cid = piece_cid
        super().__init__(f"Piece not found: {piece_cid}")


def is_not_found(exc: BaseException) -> bool:
    """Whether a download failure means the piece does not exist"""
    if isinstance(exc, PieceNotFoundError):
        return True
    # Most SDK errors only carry text
    message = str(exc)
    return 'not found' in message or '404' in message
