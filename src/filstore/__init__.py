# filstore - file upload/download and wallet funding on Filecoin warm storage
from .config import StorageOptions
from .storage import FileStorage, create_file_storage
from .pinning import PinningClient
from .payload import Blob, BytesPayload, TextPayload, JsonPayload, BlobPayload, as_payload
from .results import UploadResult, ImageUploadResult, AccountInfo, ProviderSummary, StorageInfo
from .units import parse_units, format_units, days_to_epochs
from .errors import (
    FileStorageError,
    ConfigurationError,
    NotInitializedError,
    ValidationError,
    UnsupportedInputError,
    InsufficientAllowanceError,
    PieceNotFoundError
)
from .constants import (
    MAX_FILE_SIZE,
    MIN_FILE_SIZE,
    EPOCHS_PER_DAY,
    TOKEN_DECIMALS,
    NETWORKS,
    RPC_URLS
)

__version__ = "0.1.0"
__all__ = [
    "FileStorage",
    "create_file_storage",
    "StorageOptions",
    "PinningClient",
    "Blob",
    "BytesPayload",
    "TextPayload",
    "JsonPayload",
    "BlobPayload",
    "as_payload",
    "UploadResult",
    "ImageUploadResult",
    "AccountInfo",
    "ProviderSummary",
    "StorageInfo",
    "parse_units",
    "format_units",
    "days_to_epochs",
    "FileStorageError",
    "ConfigurationError",
    "NotInitializedError",
    "ValidationError",
    "UnsupportedInputError",
    "InsufficientAllowanceError",
    "PieceNotFoundError",
    "MAX_FILE_SIZE",
    "MIN_FILE_SIZE",
    "EPOCHS_PER_DAY",
    "TOKEN_DECIMALS",
    "NETWORKS",
    "RPC_URLS"
]
