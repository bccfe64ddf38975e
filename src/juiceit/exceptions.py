"""Custom exceptions for juiceit."""


class JuiceItError(Exception):
    """Base exception for juiceit."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class MissingDependencyError(JuiceItError):
    """A required external tool or library is not installed."""

    pass


class DiscNotFoundError(JuiceItError):
    """No DVD source could be determined."""

    pass


class ScanError(JuiceItError):
    """The disc scan subprocess failed."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class RipError(JuiceItError):
    """Encoding a single title failed."""

    def __init__(
        self,
        message: str,
        title_index: int | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(message)
        self.title_index = title_index
        self.returncode = returncode


class OutputDirectoryError(JuiceItError):
    """The output directory cannot be created."""

    pass


class CacheError(JuiceItError):
    """The scan cache file cannot be written or removed."""

    pass


class CacheCorruptionError(CacheError):
    """The scan cache file exists but cannot be parsed."""

    pass
