"""Data models for the structural model of a source file."""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class SourceUnit:
    """Raw text of one source file plus its path."""

    path: Path
    text: str


@dataclass
class FunctionDeclaration:
    """A top-level function-shaped binding."""

    name: str
    raw_params: list[str]
    is_async: bool
    offset: int
    kind: str = "function"  # tag of the matcher that recognized it


@dataclass
class MethodDeclaration:
    """A method declared directly inside a class body."""

    name: str
    raw_params: list[str]
    is_async: bool
    is_static: bool = False


@dataclass
class ClassDeclaration:
    """A class and the methods found in its balanced-brace body."""

    name: str
    methods: list[MethodDeclaration]
    offset: int


@dataclass
class ExportDeclaration:
    """An exported declaration."""

    name: str
    is_default: bool
    offset: int


@dataclass
class StructuralModel:
    """Functions, classes and exports recovered from one source unit.

    The three sequences are populated independently and kept in scan order.
    Correlation between them is computed by name when tests are generated.
    """

    functions: list[FunctionDeclaration] = field(default_factory=list)
    classes: list[ClassDeclaration] = field(default_factory=list)
    exports: list[ExportDeclaration] = field(default_factory=list)

    def find_function(self, name: str) -> FunctionDeclaration | None:
        """Return the first function with the given name."""
        return next((f for f in self.functions if f.name == name), None)

    def find_class(self, name: str) -> ClassDeclaration | None:
        """Return the first class with the given name."""
        return next((c for c in self.classes if c.name == name), None)

    @property
    def default_exports(self) -> list[ExportDeclaration]:
        return [e for e in self.exports if e.is_default]

    @property
    def named_exports(self) -> list[ExportDeclaration]:
        return [e for e in self.exports if not e.is_default]

    def is_empty(self) -> bool:
        """Check if nothing at all was recognized."""
        return not (self.functions or self.classes or self.exports)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "functions": [asdict(f) for f in self.functions],
            "classes": [asdict(c) for c in self.classes],
            "exports": [asdict(e) for e in self.exports],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
