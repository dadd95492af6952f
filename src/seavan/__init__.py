"""Wrap files in container image layers for later composition."""

__version__ = "0.1.0"

from seavan.exceptions import (  # noqa: E402
    BuildFailedError,
    InvalidInputError,
    IoFailureError,
    SeavanError,
)
from seavan.executor import (  # noqa: E402
    CommandExecutor,
    CommandResult,
    SubprocessExecutor,
)
from seavan.packager import ImagePackager  # noqa: E402

__all__ = [
    "__version__",
    "BuildFailedError",
    "CommandExecutor",
    "CommandResult",
    "ImagePackager",
    "InvalidInputError",
    "IoFailureError",
    "SeavanError",
    "SubprocessExecutor",
]
