"""drive-s3: driver S3 para la abstracción de drive (almacenamiento de archivos)."""

from .crosscutting.exceptions import (
    CannotCopyFileError,
    CannotDeleteFileError,
    CannotGetMetaDataError,
    CannotMoveFileError,
    CannotReadFileError,
    CannotSetVisibilityError,
    CannotWriteFileError,
    DriveConfigurationError,
    DriveError,
)
from .domain import ContentHeaders, DriveFileStats, DriverContract, Visibility, WriteOptions
from .infrastructure.storage import ObjectStream, S3Driver, S3DriverConfig

__all__ = [
    "CannotCopyFileError",
    "CannotDeleteFileError",
    "CannotGetMetaDataError",
    "CannotMoveFileError",
    "CannotReadFileError",
    "CannotSetVisibilityError",
    "CannotWriteFileError",
    "ContentHeaders",
    "DriveConfigurationError",
    "DriveError",
    "DriveFileStats",
    "DriverContract",
    "ObjectStream",
    "S3Driver",
    "S3DriverConfig",
    "Visibility",
    "WriteOptions",
]
