"""Pydantic model for validating seavan settings files."""

from pydantic import BaseModel, ConfigDict, Field

from .packaging import NAMESPACE_PATTERN, REGISTRY_PATTERN, TAG_PATTERN


class PackagerSettings(BaseModel):
    """Defaults for the command-line front end.

    Loaded from an optional YAML file. Every key is optional; command-line
    flags take precedence over values given here.
    """

    model_config = ConfigDict(extra="forbid")

    registry: str | None = Field(None, pattern=REGISTRY_PATTERN)
    namespace: str | None = Field(None, pattern=NAMESPACE_PATTERN)
    tag: str | None = Field(None, pattern=TAG_PATTERN)
    content_digest: bool = Field(
        False, description="Include the content hash in image names"
    )
    builder: str = Field(
        "docker",
        min_length=1,
        description="Build tool executable (e.g. docker, podman)",
    )
    timeout: float | None = Field(
        None, gt=0, description="Seconds before the build tool is killed"
    )
