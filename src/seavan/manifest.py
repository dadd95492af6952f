"""Build manifest rendering and temporary file handling."""

import json
import logging
import os
import re
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from seavan.exceptions import IoFailureError

logger = logging.getLogger(__name__)

MANIFEST_TEMPLATE = "Dockerfile.j2"

# File names that cannot appear unquoted in a COPY instruction
_NEEDS_EXEC_FORM = re.compile(r"[\s\"'$]")


def setup_jinja_environment(template_dir: Path | None = None) -> Environment:
    """Set up Jinja2 environment with template directory.

    Args:
        template_dir: Directory containing templates (defaults to the
            templates shipped with the package)

    Returns:
        Configured Jinja2 Environment

    Raises:
        FileNotFoundError: If template directory doesn't exist
    """
    if template_dir is None:
        template_dir = Path(__file__).parent / "templates"

    if not template_dir.exists():
        raise FileNotFoundError(f"Template directory not found: {template_dir}")

    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=False,  # Dockerfile syntax, not HTML
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_manifest(filename: str, template_dir: Path | None = None) -> str:
    """Render the build manifest copying one file into an empty image.

    Plain names produce ``COPY name /``. Names containing whitespace,
    quotes or ``$`` use the JSON form
    ``COPY ["name", "/"]`` so the build tool copies that exact file.

    Args:
        filename: Base name of the file inside the build context
        template_dir: Optional override of the template directory

    Returns:
        Manifest text
    """
    env = setup_jinja_environment(template_dir)
    template = env.get_template(MANIFEST_TEMPLATE)

    exec_form = bool(_NEEDS_EXEC_FORM.search(filename))
    return template.render(
        filename=filename,
        exec_form=exec_form,
        copy_arguments=json.dumps([filename, "/"]),
    )


@contextmanager
def temporary_manifest(content: str) -> Iterator[Path]:
    """Write a manifest to a temporary file and remove it on exit.

    The file is removed whether the body completes or raises.

    Args:
        content: Manifest text

    Yields:
        Path to the temporary manifest

    Raises:
        IoFailureError: If the file cannot be created, written or removed
    """
    try:
        fd, name = tempfile.mkstemp(prefix="seavan-", suffix=".Dockerfile")
    except OSError as e:
        raise IoFailureError(f"Cannot create temporary manifest: {e}") from e

    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
    except Exception as e:
        path.unlink(missing_ok=True)
        raise IoFailureError(f"Cannot write temporary manifest {path}: {e}") from e

    logger.debug(f"Created manifest {path}")
    try:
        yield path
    except BaseException:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            # Keep the original error; the leftover file is only reported
            logger.error(f"Cannot remove temporary manifest {path}: {e}")
        raise

    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise IoFailureError(f"Cannot remove temporary manifest {path}: {e}") from e
    logger.debug(f"Removed manifest {path}")
