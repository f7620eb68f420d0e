"""Extract functions, classes and exports from JavaScript/TypeScript source.

Recognition is pattern based rather than a full parse. Each declaration
shape has its own tagged matcher; class bodies are delimited with an
explicit brace-depth scan so that nested blocks inside methods do not
confuse method recognition. Functions and methods are only recognized
at the nesting level of the code that declares them, never inside
another body.
"""

import logging
import re
from dataclasses import dataclass

from js_test_scaffolder.models import (
    ClassDeclaration,
    ExportDeclaration,
    FunctionDeclaration,
    MethodDeclaration,
    StructuralModel,
)

logger = logging.getLogger(__name__)

IDENTIFIER = r"[A-Za-z_$][\w$]*"

ASYNC_TOKEN = re.compile(r"\basync\b")

# Names that look like calls inside a class body but are never methods
NON_METHOD_NAMES = frozenset(
    {
        "constructor",
        "if",
        "for",
        "while",
        "switch",
        "catch",
        "function",
        "return",
        "with",
        "super",
    }
)


@dataclass(frozen=True)
class DeclarationMatcher:
    """A tagged pattern recognizing one declaration shape.

    Patterns that take parameters stop at the opening parenthesis (group
    `open`); the parameter list is delimited by a balanced scan so nested
    parentheses stay inside it.

    Attributes:
        tag: Short name of the shape (recorded on function declarations)
        pattern: Compiled regex with named group `name` and optionally
            `open`, `modifiers` and `default`
        tail: Pattern that must follow the closing parenthesis, if any
    """

    tag: str
    pattern: re.Pattern
    tail: re.Pattern | None = None


@dataclass(frozen=True)
class MatcherHit:
    """One accepted occurrence of a declaration shape."""

    matcher: DeclarationMatcher
    match: re.Match
    params: str
    end: int

    @property
    def start(self) -> int:
        return self.match.start()

    def group(self, name: str) -> str | None:
        return self.match.groupdict().get(name)


# function foo(a, b) / async function* foo<T>(a)
FUNCTION_MATCHERS = [
    DeclarationMatcher(
        tag="function",
        pattern=re.compile(
            rf"(?:\basync\s+)?\bfunction\b\s*\*?\s*(?P<name>{IDENTIFIER})"
            r"\s*(?:<[^>\n]*>)?\s*(?P<open>\()"
        ),
    ),
    # const foo = (a) => ..., let foo = async function (a) ...
    # Also matches `const x = (a + b) * 2`, a known false positive.
    DeclarationMatcher(
        tag="binding",
        pattern=re.compile(
            rf"\b(?:const|let|var)\s+(?P<name>{IDENTIFIER})\s*(?::[^=;\n]+)?=\s*"
            r"(?:async\b\s*)?"
            rf"(?:function\b\s*\*?\s*(?:{IDENTIFIER})?\s*)?"
            r"(?:<[^>\n]*>)?(?P<open>\()"
        ),
    ),
]

CLASS_MATCHERS = [
    DeclarationMatcher(
        tag="class",
        pattern=re.compile(rf"\bclass\s+(?P<name>{IDENTIFIER})"),
    ),
]

# Applied to the class body; only hits at the body's own level are kept
METHOD_MATCHERS = [
    DeclarationMatcher(
        tag="method",
        pattern=re.compile(
            r"(?<![\w$.])"
            r"(?P<modifiers>(?:(?:public|private|protected|static|readonly|override|"
            r"abstract|async|get|set)\s+)*)"
            rf"\*?\s*(?P<name>#?{IDENTIFIER})\s*\??\s*(?:<[^>\n]*>)?\s*(?P<open>\()"
        ),
        tail=re.compile(r"\s*(?::[^{;\n]+?)?\s*\{"),
    ),
    # handleClick = async (event) => { ... }
    DeclarationMatcher(
        tag="field-arrow",
        pattern=re.compile(
            r"(?<![\w$.])"
            r"(?P<modifiers>(?:(?:public|private|protected|static|readonly)\s+)*)"
            rf"(?P<name>#?{IDENTIFIER})\s*(?::[^=;\n]+)?=\s*(?P<async_marker>async\b\s*)?"
            r"(?P<open>\()"
        ),
        tail=re.compile(r"\s*(?::[^=;\n]+?)?\s*=>"),
    ),
]

EXPORT_MATCHERS = [
    DeclarationMatcher(
        tag="export",
        pattern=re.compile(
            r"\bexport\s+(?P<default>default\s+)?"
            r"(?:(?:async|abstract|declare)\s+)*"
            r"(?:function(?:\s*\*\s*|\s+)|(?:class|const|let|var)\s+)"
            rf"(?P<name>{IDENTIFIER})"
        ),
    ),
]

PARAM_NAME_PATTERN = re.compile(rf"^(?:\.\.\.)?\s*({IDENTIFIER})")


def brace_depths(text: str) -> list[int]:
    """Return the brace nesting depth at every offset of text.

    An opening brace sits at the depth outside it and a closing brace at
    the depth it returns to. Stray closing braces never go below zero.
    """
    depths = []
    depth = 0
    for char in text:
        if char == "}":
            depth = max(depth - 1, 0)
        depths.append(depth)
        if char == "{":
            depth += 1
    return depths


def _complete_hit(
    text: str, matcher: DeclarationMatcher, match: re.Match
) -> MatcherHit | None:
    if "open" not in matcher.pattern.groupindex:
        return MatcherHit(matcher, match, "", match.end())

    open_index = match.start("open")
    close_index = find_block_end(text, open_index, "(", ")")
    if close_index == len(text):
        return None

    end = close_index + 1
    if matcher.tail is not None:
        tail = matcher.tail.match(text, end)
        if tail is None:
            return None
        end = tail.end()
    return MatcherHit(matcher, match, text[open_index + 1 : close_index], end)


def _scan(
    text: str, matchers: list[DeclarationMatcher], top_level_only: bool = False
) -> list[MatcherHit]:
    """Run every matcher and merge the hits in offset order.

    A hit that overlaps an earlier accepted hit is dropped, so two shapes
    recognizing the same text yield one declaration. With top_level_only,
    hits starting inside a brace block are ignored.
    """
    depths = brace_depths(text) if top_level_only else None
    hits = []
    for matcher in matchers:
        for match in matcher.pattern.finditer(text):
            if depths is not None and depths[match.start()] > 0:
                continue
            hit = _complete_hit(text, matcher, match)
            if hit is not None:
                hits.append(hit)
    hits.sort(key=lambda hit: (hit.start, matchers.index(hit.matcher)))

    accepted = []
    last_end = -1
    for hit in hits:
        if hit.start < last_end:
            continue
        accepted.append(hit)
        last_end = hit.end
    return accepted


def split_params(raw: str) -> list[str]:
    """Split a raw parameter list into parameter names.

    Commas inside brackets, parentheses or strings do not split. Type
    annotations, default values, optional markers and rest markers are
    stripped; destructured parameters are kept as written.

    Args:
        raw: Text between the parentheses of a declaration

    Returns:
        List of parameter names (or raw text for destructuring)
    """
    if not raw.strip():
        return []

    parts = []
    current = ""
    depth = 0
    in_string = False
    string_char = None

    for char in raw:
        if in_string:
            current += char
            if char == string_char and current[-2:] != f"\\{char}":
                in_string = False
        elif char in "\"'`":
            in_string = True
            string_char = char
            current += char
        elif char in "([{<":
            depth += 1
            current += char
        elif char in ")]}" or (char == ">" and not current.endswith("=")):
            depth -= 1
            current += char
        elif char == "," and depth == 0:
            if current.strip():
                parts.append(current.strip())
            current = ""
        else:
            current += char

    if current.strip():
        parts.append(current.strip())

    names = []
    for part in parts:
        if part.startswith(("{", "[")):
            names.append(part)
            continue
        match = PARAM_NAME_PATTERN.match(part)
        names.append(match.group(1) if match else part)
    return names


def find_block_end(
    text: str, open_index: int, open_char: str = "{", close_char: str = "}"
) -> int:
    """Find the index of the bracket closing the block opened at open_index.

    Args:
        text: Source text
        open_index: Index of an opening bracket
        open_char: Opening bracket character
        close_char: Matching closing bracket character

    Returns:
        Index of the matching closing bracket, or len(text) if the block
        is never closed
    """
    depth = 0
    for i in range(open_index, len(text)):
        char = text[i]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return i
    return len(text)


def extract_class_body(text: str, class_offset: int) -> str | None:
    """Return the text between a class's braces, or None if it has none."""
    open_index = text.find("{", class_offset)
    if open_index == -1:
        return None
    close_index = find_block_end(text, open_index)
    return text[open_index + 1 : close_index]


def extract_functions(text: str) -> list[FunctionDeclaration]:
    """Recognize top-level function declarations and bindings."""
    functions = []
    for hit in _scan(text, FUNCTION_MATCHERS, top_level_only=True):
        functions.append(
            FunctionDeclaration(
                name=hit.group("name"),
                raw_params=split_params(hit.params),
                is_async=bool(ASYNC_TOKEN.search(hit.match.group(0))),
                offset=hit.start,
                kind=hit.matcher.tag,
            )
        )
        logger.debug(f"Found {hit.matcher.tag}: {hit.group('name')} at {hit.start}")
    return functions


def extract_methods(body: str) -> list[MethodDeclaration]:
    """Recognize methods declared directly in a class body."""
    methods = []
    for hit in _scan(body, METHOD_MATCHERS, top_level_only=True):
        name = hit.group("name")
        modifiers = hit.group("modifiers").split()
        if name in NON_METHOD_NAMES:
            continue
        # Private names and accessors cannot be called from a test
        if name.startswith("#") or "get" in modifiers or "set" in modifiers:
            continue
        methods.append(
            MethodDeclaration(
                name=name,
                raw_params=split_params(hit.params),
                is_async="async" in modifiers or bool(hit.group("async_marker")),
                is_static="static" in modifiers,
            )
        )
        logger.debug(f"Found {hit.matcher.tag}: {name}")
    return methods


def extract_classes(text: str) -> list[ClassDeclaration]:
    """Recognize classes and the methods inside their bodies."""
    classes = []
    for hit in _scan(text, CLASS_MATCHERS):
        body = extract_class_body(text, hit.end)
        methods = extract_methods(body) if body is not None else []
        classes.append(
            ClassDeclaration(
                name=hit.group("name"),
                methods=methods,
                offset=hit.start,
            )
        )
        logger.debug(f"Found class: {hit.group('name')} with {len(methods)} methods")
    return classes


def extract_exports(text: str) -> list[ExportDeclaration]:
    """Recognize exported declarations."""
    return [
        ExportDeclaration(
            name=hit.group("name"),
            is_default=hit.group("default") is not None,
            offset=hit.start,
        )
        for hit in _scan(text, EXPORT_MATCHERS)
    ]


def extract_structure(text: str) -> StructuralModel:
    """Build the structural model of one source text.

    Unrecognized or ambiguous constructs are left out of the model; this
    never raises for malformed input.

    Args:
        text: JavaScript/TypeScript source code

    Returns:
        StructuralModel with functions, classes and exports in scan order
    """
    model = StructuralModel(
        functions=extract_functions(text),
        classes=extract_classes(text),
        exports=extract_exports(text),
    )
    logger.info(
        f"Extracted {len(model.functions)} functions, {len(model.classes)} classes, "
        f"{len(model.exports)} exports"
    )
    return model
