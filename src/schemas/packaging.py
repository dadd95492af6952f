"""Pydantic model for validating image packaging requests."""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TAG = "latest"

# Registry host: DNS labels joined by dots, optional port
REGISTRY_PATTERN = (
    r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*"
    r"(?::[0-9]+)?$"
)

# Tag: word character first, at most 128 characters
TAG_PATTERN = r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$"

# COPY treats these as wildcard pattern characters in every instruction form
WILDCARD_CHARACTERS = frozenset("*?[\\")

# Namespace: one or more lowercase repository path components
_PATH_COMPONENT = r"[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*"
NAMESPACE_PATTERN = rf"^{_PATH_COMPONENT}(?:/{_PATH_COMPONENT})*$"


class PackagingRequest(BaseModel):
    """Validated configuration of a single image packaging operation.

    Instances are frozen. Reconfiguration produces a new, re-validated
    instance so a request can be shared between callers and threads.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_path: Path = Field(description="File to embed at the image root")
    registry: str | None = Field(
        None,
        pattern=REGISTRY_PATTERN,
        description="Registry host prefix, optionally with port",
    )
    namespace: str | None = Field(
        None,
        pattern=NAMESPACE_PATTERN,
        description="Repository path between registry and image name",
    )
    tag: str = Field(DEFAULT_TAG, pattern=TAG_PATTERN, description="Image tag")
    content_digest: bool = Field(
        False,
        description="Prefix the image name with the SHA256 of the file content",
    )

    @field_validator("source_path")
    @classmethod
    def validate_source_file(cls, value: Path) -> Path:
        """Ensure the source is an existing, readable regular file.

        The name must be UTF-8 and free of COPY wildcard characters so the
        build tool copies exactly this file.

        Returns the canonical absolute path.
        """
        path = value.expanduser().resolve()
        if not path.exists():
            raise ValueError(f"Source file does not exist: {value}")
        if not path.is_file():
            raise ValueError(f"Source path is not a regular file: {value}")
        if not os.access(path, os.R_OK):
            raise ValueError(f"Source file is not readable: {value}")
        try:
            path.name.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValueError(
                f"Source file name is not valid UTF-8: {path.name!r}"
            ) from e
        wildcards = sorted(WILDCARD_CHARACTERS.intersection(path.name))
        if wildcards:
            raise ValueError(
                f"Source file name contains wildcard characters "
                f"{''.join(wildcards)!r}: {path.name!r}"
            )
        return path
