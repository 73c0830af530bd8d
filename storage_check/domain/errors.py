from __future__ import annotations


class BackendCheckError(Exception):
    """Base class for every failure that ends a check run."""


class ConfigurationError(BackendCheckError):
    pass


class FilesystemError(BackendCheckError):
    pass


class UploadError(BackendCheckError):
    pass


class ListError(BackendCheckError):
    pass


class AccessError(BackendCheckError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnexpectedError(BackendCheckError):
    pass
