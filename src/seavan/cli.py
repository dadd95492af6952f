"""Command-line interface for seavan."""

import argparse
import logging
import shutil
import sys
import traceback
from pathlib import Path

from seavan import __version__
from seavan.exceptions import BuildFailedError, InvalidInputError, IoFailureError
from seavan.executor import SubprocessExecutor
from seavan.packager import ImagePackager
from seavan.validator import load_settings

# Exit codes
EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_BUILD_ERROR = 3
EXIT_DEPENDENCY_ERROR = 4
EXIT_IO_ERROR = 5

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(args)

    try:
        settings = load_settings(Path(args.config) if args.config else None)

        builder = args.builder if args.builder is not None else settings.builder
        timeout = args.timeout if args.timeout is not None else settings.timeout
        packager = ImagePackager(
            args.file, executor=SubprocessExecutor(builder, timeout=timeout)
        )

        registry = args.registry if args.registry is not None else settings.registry
        if registry is not None:
            packager = packager.with_registry(registry)

        namespace = (
            args.namespace if args.namespace is not None else settings.namespace
        )
        if namespace is not None:
            packager = packager.with_namespace(namespace)

        tag = args.tag if args.tag is not None else settings.tag
        if tag is not None:
            packager = packager.with_tag(tag)

        if args.digest or settings.content_digest:
            packager = packager.with_content_digest()

        check_dependencies(builder)

        logger.info(f"Packaging {packager.source_path}")
        reference = packager.create_image()
        logger.info(f"✓ Image created: {reference}")

        print(reference)
        return EXIT_SUCCESS

    except InvalidInputError as e:
        logger.error(f"Invalid input: {e}")
        print(f"\nERROR: Invalid input\n{e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    except FileNotFoundError as e:
        logger.error(f"Dependency check failed: {e}")
        print(f"\nERROR: {e}\n", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR

    except BuildFailedError as e:
        logger.error(f"Image build failed: {e.reason}")
        print("\nERROR: Image build failed\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        return EXIT_BUILD_ERROR

    except IoFailureError as e:
        logger.error(f"I/O failure: {e}")
        print(f"\nERROR: {e}\n", file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        return EXIT_IO_ERROR

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return EXIT_BUILD_ERROR


def create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="seavan",
        description="Wrap a file in a container image for later mounting",
        epilog=(
            "The image is built locally with the build tool and is not pushed. "
            "The image reference is printed on success."
        ),
    )

    parser.add_argument(
        "file",
        metavar="FILE",
        help="File to place at the image root",
    )

    # Naming options
    parser.add_argument(
        "--registry",
        metavar="HOST",
        help="Registry host prefix (e.g., registry.local:5000)",
    )
    parser.add_argument(
        "--namespace",
        metavar="PATH",
        help="Repository path between registry and image name",
    )
    parser.add_argument(
        "-t",
        "--tag",
        metavar="TAG",
        help="Image tag (default: latest)",
    )
    parser.add_argument(
        "--digest",
        action="store_true",
        help="Prefix the image name with the SHA256 of the file content",
    )

    # Build tool options
    parser.add_argument(
        "--builder",
        metavar="PROGRAM",
        help="Build tool executable (default: docker)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        metavar="SECONDS",
        help="Kill the build tool after this many seconds (default: no limit)",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="YAML settings file with defaults for the options above",
    )

    # Verbosity options
    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (show progress details)",
    )
    verbosity_group.add_argument(
        "--debug", action="store_true", help="Debug output (show all details)"
    )
    verbosity_group.add_argument(
        "-q", "--quiet", action="store_true", help="Quiet mode (errors only)"
    )

    # Version
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def setup_logging(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments
    """
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _positive_float(value: str) -> float:
    """Argparse type for strictly positive numbers."""
    try:
        number = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value!r}")
    return number


def check_dependencies(builder: str) -> None:
    """Check that the build tool is available.

    Args:
        builder: Build tool executable name or path

    Raises:
        FileNotFoundError: If no build tool is given or it is not on PATH
    """
    if not builder:
        raise FileNotFoundError(
            "No build tool given.\nPass --builder with a program name such as docker"
        )

    if not shutil.which(builder):
        raise FileNotFoundError(
            f"{builder} not found.\n"
            "Install a container build tool (e.g., docker or podman) "
            "or pass --builder"
        )


if __name__ == "__main__":
    sys.exit(main())
