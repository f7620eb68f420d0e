"""Run test generation over a source tree."""

import logging
import operator
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path

from js_test_scaffolder.discovery import DEFAULT_PATTERN, find_source_files
from js_test_scaffolder.extractor import extract_structure
from js_test_scaffolder.frameworks import DEFAULT_FRAMEWORK, FrameworkProfile, get_profile
from js_test_scaffolder.models import SourceUnit
from js_test_scaffolder.paths import get_import_path, get_test_file_path
from js_test_scaffolder.test_generator import generate_test_file

logger = logging.getLogger(__name__)


class SetupError(Exception):
    """Fatal configuration problem detected before any file is processed."""


@dataclass
class GeneratorOptions:
    """Settings for one generation run.

    Sources whose test file already exists are skipped unless `overwrite`
    is set.
    """

    src_dir: Path = Path("./src")
    output_dir: Path = Path("./test")
    pattern: str = DEFAULT_PATTERN
    framework: str = DEFAULT_FRAMEWORK
    overwrite: bool = False
    dry_run: bool = False

    def __post_init__(self):
        self.src_dir = Path(self.src_dir)
        self.output_dir = Path(self.output_dir)


@dataclass(frozen=True)
class GenerationTally:
    """Counts of what happened to source files.

    Tallies are combined with `+`, so per-file results can be produced
    independently and summed once at the end.
    """

    generated: int = 0
    skipped: int = 0
    failed: int = 0

    def __add__(self, other: "GenerationTally") -> "GenerationTally":
        return GenerationTally(
            generated=self.generated + other.generated,
            skipped=self.skipped + other.skipped,
            failed=self.failed + other.failed,
        )


@dataclass
class UnitError:
    """A non-fatal error encountered while processing one source file."""

    path: str
    error: str
    phase: str  # "reading", "generation", "writing"


@dataclass
class UnitResult:
    """Outcome of processing one source file."""

    source: Path
    test_file: Path
    tally: GenerationTally
    error: UnitError | None = None
    content: str | None = None


@dataclass
class RunSummary:
    """Outcome of a whole run."""

    files_found: int
    tally: GenerationTally = field(default_factory=GenerationTally)
    errors: list[UnitError] = field(default_factory=list)


def render_test(unit: SourceUnit, test_file: Path, profile: FrameworkProfile) -> str:
    """Generate the test scaffold text for one source unit.

    Args:
        unit: The source file and its text
        test_file: Where the test will be written
        profile: Framework profile for the generated code

    Returns:
        Test file content
    """
    model = extract_structure(unit.text)
    import_path = get_import_path(unit.path, test_file)
    return generate_test_file(model, profile, import_path, unit.path.stem)


def _failed(source: Path, test_file: Path, error: Exception, phase: str) -> UnitResult:
    logger.info(f"Error generating test for {source} ({phase}): {error}")
    return UnitResult(
        source=source,
        test_file=test_file,
        tally=GenerationTally(failed=1),
        error=UnitError(path=str(source), error=str(error), phase=phase),
    )


def process_source_file(
    source: Path, options: GeneratorOptions, profile: FrameworkProfile
) -> UnitResult:
    """Generate and write the test for one source file.

    Errors are caught here and reported in the result so that one bad
    file does not stop the run.

    Args:
        source: Source file path
        options: Run settings
        profile: Framework profile for the generated code

    Returns:
        UnitResult with a tally of exactly one generated, skipped or failed file
    """
    test_file = get_test_file_path(source, options.src_dir, options.output_dir)

    if test_file.exists() and not options.overwrite:
        logger.info(f"Skipping {source} - test already exists at {test_file}")
        return UnitResult(source, test_file, GenerationTally(skipped=1))

    logger.info(f"Generating test for {source} -> {test_file}")

    try:
        unit = SourceUnit(path=source, text=source.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return _failed(source, test_file, e, "reading")

    try:
        content = render_test(unit, test_file, profile)
    except Exception as e:
        return _failed(source, test_file, e, "generation")

    if options.dry_run:
        logger.debug(f"Dry run, not writing {test_file}:\n{content}")
    else:
        try:
            test_file.parent.mkdir(parents=True, exist_ok=True)
            test_file.write_text(content, encoding="utf-8")
        except OSError as e:
            return _failed(source, test_file, e, "writing")

    return UnitResult(source, test_file, GenerationTally(generated=1), content=content)


def generate_tests(options: GeneratorOptions) -> RunSummary:
    """Generate tests for every source file under the source root.

    Args:
        options: Run settings

    Returns:
        RunSummary with combined counts and per-file errors

    Raises:
        SetupError: If the source root does not exist
        UnknownFrameworkError: If the framework id is not known
    """
    if not options.src_dir.is_dir():
        raise SetupError(f"Source directory not found: {options.src_dir}")

    profile = get_profile(options.framework)
    logger.info(f"Generating {profile.id} tests for {options.src_dir}")

    sources = find_source_files(options.src_dir, options.pattern)
    if not sources:
        return RunSummary(files_found=0)

    if not options.dry_run and not options.output_dir.exists():
        options.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created output directory: {options.output_dir}")

    results = [process_source_file(source, options, profile) for source in sources]

    summary = RunSummary(
        files_found=len(sources),
        tally=reduce(operator.add, (r.tally for r in results), GenerationTally()),
        errors=[r.error for r in results if r.error is not None],
    )
    logger.info(
        f"Generation complete: {summary.tally.generated} generated, "
        f"{summary.tally.skipped} skipped, {summary.tally.failed} failed"
    )
    return summary
