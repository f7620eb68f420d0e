"""Command-line interface for js-test-scaffolder."""

import argparse
import logging
import sys
from pathlib import Path

from js_test_scaffolder.discovery import DEFAULT_PATTERN
from js_test_scaffolder.extractor import extract_structure
from js_test_scaffolder.frameworks import DEFAULT_FRAMEWORK, UnknownFrameworkError, framework_ids
from js_test_scaffolder.runner import GeneratorOptions, SetupError, generate_tests

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SETUP_ERROR = 1
EXIT_UNIT_FAILURES = 2


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="js-test-scaffolder",
        description="Generate test scaffolds for JavaScript/TypeScript source files",
    )
    parser.add_argument(
        "--src",
        default="./src",
        help="Source directory to analyze (default: ./src)",
    )
    parser.add_argument(
        "--output",
        default="./test",
        help="Output directory for test files (default: ./test)",
    )
    parser.add_argument(
        "--pattern",
        default=DEFAULT_PATTERN,
        help=f"File pattern to match (default: {DEFAULT_PATTERN}); "
        "only the .js/.ts/.tsx extensions are actually filtered on",
    )
    parser.add_argument(
        "--framework",
        default=DEFAULT_FRAMEWORK,
        type=str.lower,
        choices=framework_ids(),
        help=f"Test framework to generate for (default: {DEFAULT_FRAMEWORK})",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite existing test files",
    )
    parser.add_argument(
        "--only-missing",
        action="store_true",
        default=True,
        help="Generate tests only for files without existing tests (always on; "
        "use --overwrite to replace existing tests)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Display per-file details",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate tests without writing any files",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit with code {EXIT_UNIT_FAILURES} if any file failed to generate",
    )
    parser.add_argument(
        "--dump-model",
        metavar="FILE",
        help="Print the structural model of one source file as JSON and exit",
    )
    return parser


def parse_args(args: list[str]) -> argparse.Namespace:
    """Parse command-line arguments."""
    return create_parser().parse_args(args)


def run_dump_model(path: str) -> int:
    """Print the structural model of a single file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: could not read {path}: {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR
    print(extract_structure(text).to_json())
    return EXIT_OK


def run_generate(parsed: argparse.Namespace) -> int:
    """Run test generation and print the summary.

    Returns:
        Exit code (0 for success, even when some files failed)
    """
    options = GeneratorOptions(
        src_dir=Path(parsed.src),
        output_dir=Path(parsed.output),
        pattern=parsed.pattern,
        framework=parsed.framework,
        overwrite=parsed.overwrite,
        dry_run=parsed.dry_run,
    )
    print(f"Generating test cases for {options.src_dir}...", file=sys.stderr)

    try:
        summary = generate_tests(options)
    except (SetupError, UnknownFrameworkError) as e:
        logger.error(f"Setup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR

    if summary.files_found == 0:
        print(f"No files found matching pattern: {options.pattern}", file=sys.stderr)
        return EXIT_OK

    tally = summary.tally
    print(f"Found {summary.files_found} source files.", file=sys.stderr)
    print(
        f"Generation complete: {tally.generated} generated, "
        f"{tally.skipped} skipped, {tally.failed} failed",
        file=sys.stderr,
    )

    if parsed.strict and tally.failed:
        return EXIT_UNIT_FAILURES
    return EXIT_OK


def run_cli(args: list[str]) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for fatal errors)
    """
    try:
        parsed = parse_args(args)
    except SystemExit as e:
        return EXIT_OK if e.code == 0 else EXIT_SETUP_ERROR

    setup_logging(parsed.verbose)

    if parsed.dump_model:
        return run_dump_model(parsed.dump_model)
    return run_generate(parsed)


def main():
    """Entry point for the CLI."""
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
