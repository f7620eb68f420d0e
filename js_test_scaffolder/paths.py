"""Map source files to test file destinations and import paths."""

import os
import re
from pathlib import Path, PurePosixPath

TEST_SUFFIXES = (".test", ".spec")
TEST_MARKER = ".test"

_EXTENSION = re.compile(r"\.[^/.]+$")


def get_test_file_path(source: Path, src_root: Path, output_root: Path) -> Path:
    """Derive the test file path for a source file.

    The source root prefix is replaced by the output root and `.test` is
    inserted before the extension unless a `.test`/`.spec` marker is
    already present.

    Args:
        source: Path of the source file
        src_root: Configured source root
        output_root: Configured output root

    Returns:
        Destination path, e.g. output/utils/math.test.js for src/utils/math.js
    """
    source = Path(source)
    try:
        relative = source.relative_to(src_root)
    except ValueError:
        relative = Path(source.name)
    test_file = Path(output_root) / relative

    stem, suffix = test_file.stem, test_file.suffix
    if not stem.endswith(TEST_SUFFIXES):
        test_file = test_file.with_name(f"{stem}{TEST_MARKER}{suffix}")
    return test_file


def get_import_path(source: Path, test_file: Path) -> str:
    """Compute the module specifier a test file uses to import its source.

    Args:
        source: Path of the source file
        test_file: Path of the generated test file

    Returns:
        Relative POSIX path without extension, always starting with "."
    """
    relative = os.path.relpath(Path(source), Path(test_file).parent)
    import_path = PurePosixPath(*Path(relative).parts).as_posix()
    if not import_path.startswith("."):
        import_path = f"./{import_path}"
    return _EXTENSION.sub("", import_path)
