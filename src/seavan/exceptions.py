"""Custom exceptions for image packaging."""


class SeavanError(Exception):
    """Base exception for all packaging errors."""

    pass


class InvalidInputError(SeavanError):
    """Raised when a source path, registry, namespace or tag is invalid.

    Always raised before any external process is spawned, so no image
    or temporary file exists when this error is seen.
    """

    pass


class IoFailureError(SeavanError):
    """Raised when the temporary build manifest cannot be created, written
    or removed."""

    pass


class BuildFailedError(SeavanError):
    """Raised when the external build tool fails.

    Carries the attempted image reference, the command line and the
    captured error output so the failure can be diagnosed without
    re-running the build.
    """

    #: Number of trailing stderr lines included in the error message
    TAIL_LINES = 20

    def __init__(
        self,
        reason: str,
        reference: str,
        command: list[str],
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.reason = reason
        self.reference = reference
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(self._format_message())

    @property
    def stderr_tail(self) -> str:
        """Last TAIL_LINES lines of the captured error output."""
        lines = self.stderr.rstrip().splitlines()
        return "\n".join(lines[-self.TAIL_LINES :])

    def _format_message(self) -> str:
        message = f"{self.reason} while building {self.reference}"
        if self.returncode is not None:
            message += f" (exit code {self.returncode})"
        message += f"\nCommand: {' '.join(self.command)}"
        tail = self.stderr_tail
        if tail:
            message += f"\n{tail}"
        return message
