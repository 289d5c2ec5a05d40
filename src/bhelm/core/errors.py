"""Exception hierarchy for repository resolution and installation."""

from __future__ import annotations


class BhelmError(Exception):
    """Base class for every failure the CLI reports to the user."""


class InvalidArgumentError(BhelmError):
    pass


class CacheNotFoundError(BhelmError):
    pass


class CacheCorruptError(BhelmError):
    pass


class CacheWriteError(BhelmError):
    pass


class EmptyResultError(BhelmError):
    pass


class RegistryError(BhelmError):
    """Transport or HTTP failure talking to the package registry."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NoOfficialRepositoryError(BhelmError):
    def __init__(self, message: str = "no official repository found"):
        super().__init__(message)


class NoPackageFoundError(BhelmError):
    def __init__(self, message: str = "no package found"):
        super().__init__(message)


class OperationCancelledError(BhelmError):
    def __init__(self, message: str = "operation cancelled by user"):
        super().__init__(message)


class InstallError(BhelmError):
    pass
