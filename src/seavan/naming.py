"""Image naming utilities.

This module derives repository names from source file names and composes
qualified image references.

References follow the pattern: [registry/][namespace/]name:tag
"""

import re
import unicodedata
from pathlib import Path

from seavan.exceptions import InvalidInputError

# Separator between the content digest and the derived name
DIGEST_SEPARATOR = "--"

# Length of a hex SHA256 digest
DIGEST_LENGTH = 64

# Longest repository part (registry/namespace/name) accepted by build tools
MAX_REPOSITORY_LENGTH = 255


def normalize_repository_name(name: str) -> str:
    """Normalize a string to a valid repository name component.

    Normalizes the name by:
    - Converting accented characters to ASCII and dropping the rest
    - Converting to lowercase
    - Replacing characters outside [a-z0-9._-] with hyphens
    - Collapsing runs of separators into a single hyphen
    - Stripping leading/trailing separators

    Args:
        name: The string to normalize

    Returns:
        Normalized name made of lowercase letters, digits and single separators

    Raises:
        InvalidInputError: If the result would be empty

    Examples:
        >>> normalize_repository_name("README")
        "readme"
        >>> normalize_repository_name("My Notes")
        "my-notes"
        >>> normalize_repository_name("data__v2..final")
        "data-v2-final"
    """
    normalized = unicodedata.normalize("NFKD", name)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")

    result = ascii_only.lower()
    result = re.sub(r"[^a-z0-9._-]", "-", result)

    # A single '.', '_' or '-' is a valid separator; anything longer is collapsed
    result = re.sub(r"[._-]{2,}", "-", result)

    result = result.strip("._-")

    if not result:
        raise InvalidInputError(
            f"Cannot derive image name from '{name}': "
            "result would be empty after normalization"
        )

    return result


def derive_repository_name(source_path: Path) -> str:
    """Derive the repository name from a source file name.

    The final extension is dropped before normalization, so "README.md"
    becomes "readme" and "archive.tar.gz" becomes "archive.tar".

    Args:
        source_path: Path to the source file

    Returns:
        Normalized repository name

    Raises:
        InvalidInputError: If the file name yields an empty name
    """
    return normalize_repository_name(source_path.stem)


def compose_repository(
    name: str,
    registry: str | None = None,
    namespace: str | None = None,
    digest: str | None = None,
) -> str:
    """Compose the repository part of an image reference (without tag).

    Args:
        name: Repository name (already normalized)
        registry: Optional registry host
        namespace: Optional repository path inside the registry
        digest: Optional content digest prefixed to the name

    Returns:
        Repository (e.g., "registry.local/files/readme")

    Raises:
        InvalidInputError: If the repository exceeds MAX_REPOSITORY_LENGTH
    """
    if digest:
        name = f"{digest}{DIGEST_SEPARATOR}{name}"

    parts = []

    if registry:
        parts.append(registry)

    if namespace:
        parts.append(namespace)

    parts.append(name)

    repository = "/".join(parts)
    if len(repository) > MAX_REPOSITORY_LENGTH:
        raise InvalidInputError(
            f"Image repository is {len(repository)} characters long, "
            f"the limit is {MAX_REPOSITORY_LENGTH}: {repository}"
        )

    return repository


def check_repository_length(
    name: str,
    registry: str | None = None,
    namespace: str | None = None,
    content_digest: bool = False,
) -> None:
    """Check the repository length without reading the file for its digest.

    Raises:
        InvalidInputError: If the repository would exceed MAX_REPOSITORY_LENGTH
    """
    placeholder = "0" * DIGEST_LENGTH if content_digest else None
    compose_repository(name, registry=registry, namespace=namespace, digest=placeholder)


def compose_reference(
    name: str,
    tag: str,
    registry: str | None = None,
    namespace: str | None = None,
    digest: str | None = None,
) -> str:
    """Compose a qualified image reference from components.

    Args:
        name: Repository name (already normalized)
        tag: Image tag
        registry: Optional registry host
        namespace: Optional repository path inside the registry
        digest: Optional content digest prefixed to the name

    Returns:
        Qualified reference (e.g., "registry.local/files/readme:latest")

    Raises:
        InvalidInputError: If the repository part is too long

    Examples:
        >>> compose_reference("readme", "latest")
        "readme:latest"
        >>> compose_reference("foo", "t", registry="r")
        "r/foo:t"
    """
    repository = compose_repository(
        name, registry=registry, namespace=namespace, digest=digest
    )
    return f"{repository}:{tag}"
