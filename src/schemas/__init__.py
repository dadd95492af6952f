"""Schema definitions for image packaging validation."""

from .packaging import (
    DEFAULT_TAG,
    NAMESPACE_PATTERN,
    REGISTRY_PATTERN,
    TAG_PATTERN,
    PackagingRequest,
)
from .settings import PackagerSettings

__all__ = [
    "DEFAULT_TAG",
    "NAMESPACE_PATTERN",
    "REGISTRY_PATTERN",
    "TAG_PATTERN",
    "PackagingRequest",
    "PackagerSettings",
]
