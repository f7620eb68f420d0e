"""Find source files to generate tests for."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "**/*.{js,ts,tsx}"
DEFAULT_EXTENSIONS = (".js", ".ts", ".tsx")
SKIPPED_DIRECTORIES = frozenset({"node_modules"})
TEST_MARKERS = (".test", ".spec")


def is_test_file(path: Path) -> bool:
    """Check if a file is already a test (name.test.js, name.spec.ts, ...)."""
    return path.stem.endswith(TEST_MARKERS)


def find_source_files(
    src_root: Path,
    pattern: str = DEFAULT_PATTERN,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Find source files under a directory.

    Only the extension allow-list filters files; the glob pattern is
    accepted for reporting but not interpreted.

    Args:
        src_root: Directory to search
        pattern: File pattern from the command line
        extensions: File extensions to include

    Returns:
        Sorted list of source file paths
    """
    logger.info(f"Searching {src_root} for {pattern} (extensions: {', '.join(extensions)})")
    files = []

    for file_path in sorted(Path(src_root).rglob("*")):
        relative_parts = file_path.relative_to(src_root).parts
        if any(
            part in SKIPPED_DIRECTORIES or part.startswith(".")
            for part in relative_parts[:-1]
        ):
            continue
        if not file_path.is_file() or file_path.suffix not in extensions:
            continue
        # Type declarations have nothing to call
        if file_path.name.endswith(".d.ts") or is_test_file(file_path):
            continue
        files.append(file_path)

    logger.info(f"Found {len(files)} source files in {src_root}")
    return files
