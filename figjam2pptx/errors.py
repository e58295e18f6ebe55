"""Exceptions raised by the export pipeline.

Only whole-export failures are exceptions. Per-node problems (unsupported
node types, mixed or unknown paints) are logged and absorbed by the
extractors.
"""


class ExportError(Exception):
    """Base class for export failures."""


class EmptySelectionError(ExportError):
    """Raised when an export is requested with nothing selected."""

    def __init__(self, message: str = "Please select at least one object to export"):
        super().__init__(message)


class InvalidHostNodeError(ExportError, ValueError):
    """Raised for a host object that is not a node at all (no type tag)."""


class UnsupportedFormatError(ExportError, ValueError):
    """Raised when an unknown output format is requested."""

    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"Unsupported export format: {fmt!r}")


class SerializationError(ExportError):
    """Raised when rendering the extracted nodes fails.

    The original exception is kept on ``cause`` and chained with ``from``.
    """

    def __init__(self, fmt: str, cause: BaseException):
        self.format = fmt
        self.cause = cause
        super().__init__(f"Failed to serialize export as {fmt}: {cause}")
