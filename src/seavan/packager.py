"""Packaging of a single file into a container image.

ImagePackager is a value: configuration methods return new packagers and
never modify the receiver, so one packager can be shared between threads
and used as the base of several configurations.

Typical use::

    reference = (
        ImagePackager("data/model.bin")
        .with_registry("registry.local:5000")
        .with_tag("v2")
        .create_image()
    )
"""

import logging
import os
import subprocess
from pathlib import Path

from schemas.packaging import PackagingRequest
from seavan.exceptions import BuildFailedError, InvalidInputError
from seavan.executor import CommandExecutor, SubprocessExecutor
from seavan.manifest import render_manifest, temporary_manifest
from seavan.naming import (
    check_repository_length,
    compose_reference,
    derive_repository_name,
)
from seavan.utils.hashing import compute_file_hash
from seavan.validator import validate_request

logger = logging.getLogger(__name__)


class ImagePackager:
    """Wraps one local file in a container image.

    Args:
        source_path: File to embed at the image root
        executor: Build tool runner (default: docker as a child process)

    Raises:
        InvalidInputError: If the path is not an existing, readable regular
            file or its name cannot be turned into an image name of at most
            255 characters including registry and namespace
    """

    __slots__ = ("_request", "_executor", "_derived_name")

    def __init__(
        self,
        source_path: str | os.PathLike[str],
        executor: CommandExecutor | None = None,
    ):
        self._init(validate_request(source_path=source_path), executor)

    def _init(
        self, request: PackagingRequest, executor: CommandExecutor | None
    ) -> None:
        self._request = request
        self._executor = executor if executor is not None else SubprocessExecutor()
        self._derived_name = derive_repository_name(request.source_path)
        check_repository_length(
            self._derived_name,
            registry=request.registry,
            namespace=request.namespace,
            content_digest=request.content_digest,
        )

    @classmethod
    def from_request(
        cls, request: PackagingRequest, executor: CommandExecutor | None = None
    ) -> "ImagePackager":
        """Create a packager from an already validated request."""
        packager = cls.__new__(cls)
        packager._init(request, executor)
        return packager

    def _replace(self, **changes) -> "ImagePackager":
        # model_copy() skips validation, so rebuild from the merged fields
        fields = self._request.model_dump()
        fields.update(changes)
        return ImagePackager.from_request(validate_request(**fields), self._executor)

    def with_registry(self, host: str) -> "ImagePackager":
        """Return a packager that prefixes the image name with a registry host.

        Args:
            host: Registry host, optionally with port (e.g., "registry.local:5000")
        """
        return self._replace(registry=host)

    def with_namespace(self, namespace: str) -> "ImagePackager":
        """Return a packager that places the image under a repository path.

        Args:
            namespace: Lowercase path such as "team/files"
        """
        return self._replace(namespace=namespace)

    def with_tag(self, tag: str) -> "ImagePackager":
        """Return a packager using the given image tag."""
        return self._replace(tag=tag)

    def with_content_digest(self, enabled: bool = True) -> "ImagePackager":
        """Return a packager that prefixes the image name with the file's SHA256.

        Images built from different contents of the same file then never
        share a name.
        """
        return self._replace(content_digest=enabled)

    def with_executor(self, executor: CommandExecutor) -> "ImagePackager":
        """Return a packager running the build through another executor."""
        return ImagePackager.from_request(self._request, executor)

    @property
    def request(self) -> PackagingRequest:
        return self._request

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    @property
    def source_path(self) -> Path:
        return self._request.source_path

    @property
    def registry(self) -> str | None:
        return self._request.registry

    @property
    def namespace(self) -> str | None:
        return self._request.namespace

    @property
    def tag(self) -> str:
        return self._request.tag

    @property
    def derived_name(self) -> str:
        return self._derived_name

    @property
    def build_context(self) -> Path:
        """Directory passed to the build tool as build context."""
        return self._request.source_path.parent

    @property
    def qualified_name(self) -> str:
        """Reference the image will be tagged with.

        Reads the whole file when the content digest is enabled.

        Raises:
            InvalidInputError: If the file cannot be read for hashing
        """
        digest = None
        if self._request.content_digest:
            try:
                digest = compute_file_hash(self.source_path)
            except OSError as e:
                raise InvalidInputError(
                    f"Cannot read source file {self.source_path}: {e}"
                ) from e

        return compose_reference(
            self._derived_name,
            self._request.tag,
            registry=self._request.registry,
            namespace=self._request.namespace,
            digest=digest,
        )

    def create_image(self) -> str:
        """Build a local image containing the source file at its root.

        Blocks until the build tool exits. The temporary manifest is removed
        on every exit path.

        Returns:
            Qualified image reference

        Raises:
            InvalidInputError: If the source file disappeared or became
                unreadable (no process is started)
            IoFailureError: If the temporary manifest cannot be handled
            BuildFailedError: If the build tool is missing, times out or
                exits non-zero
        """
        source_path = self.source_path
        if not source_path.is_file() or not os.access(source_path, os.R_OK):
            raise InvalidInputError(
                f"Source file is missing or unreadable: {source_path}"
            )

        reference = self.qualified_name
        context_dir = self.build_context
        manifest = render_manifest(source_path.name)

        logger.info(f"Building {reference} from {source_path}")

        with temporary_manifest(manifest) as manifest_path:
            args = [
                "build",
                "--file",
                str(manifest_path),
                "--tag",
                reference,
                str(context_dir),
            ]
            command = [self._executor.program, *args]

            try:
                result = self._executor.run(args, cwd=context_dir)
            except FileNotFoundError as e:
                raise BuildFailedError(
                    f"{self._executor.program} not found", reference, command
                ) from e
            except subprocess.TimeoutExpired as e:
                raise BuildFailedError(
                    f"Build timed out after {e.timeout} seconds",
                    reference,
                    command,
                    stderr=_decode_output(e.stderr),
                ) from e

        if not result.success:
            raise BuildFailedError(
                "Build failed",
                reference,
                result.args,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        if result.stdout:
            logger.debug(f"Build output: {result.stdout}")

        logger.info(f"✓ Built {reference}")
        return reference

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImagePackager):
            return NotImplemented
        return self._request == other._request and self._executor is other._executor

    def __hash__(self) -> int:
        return hash((self._request, id(self._executor)))

    def __repr__(self) -> str:
        return (
            f"ImagePackager(source_path={str(self.source_path)!r}, "
            f"registry={self.registry!r}, namespace={self.namespace!r}, "
            f"tag={self.tag!r}, content_digest={self._request.content_digest!r})"
        )


def _decode_output(output: bytes | str | None) -> str:
    """Normalize output captured by subprocess.TimeoutExpired."""
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
