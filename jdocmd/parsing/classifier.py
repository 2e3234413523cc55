"""Line classification for Java-family source files.

Every physical line is mapped to exactly one :class:`LineCategory`. The
classifier looks at a single line plus one bit of caller-supplied state
(whether a block comment is currently open); it never looks ahead and never
raises. Lines it cannot make sense of degrade to ``OTHER`` or ``BLANK``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class LineCategory(str, Enum):
    """Closed set of categories a source line can fall into."""

    PACKAGE = "package"
    DEPENDENCY = "dependency"
    CLASS = "class"
    COMMENT_OPEN = "comment_open"
    COMMENT_CLOSE = "comment_close"
    COMMENT_BODY = "comment_body"
    COMMENT_TAG = "comment_tag"
    METHOD = "method"
    ANNOTATION = "annotation"
    BLANK = "blank"
    OTHER = "other"


class TagKind(str, Enum):
    PARAM = "param"
    RETURN = "return"
    OTHER = "other"


@dataclass(frozen=True)
class Tag:
    """An ``@``-prefixed note inside a doc comment."""

    kind: TagKind
    name: str
    detail: str
    marker: str = ""


@dataclass(frozen=True)
class Declaration:
    """Signature fields captured from a class or method declaration line."""

    kind: LineCategory
    name: str
    visibility: str = ""
    return_type: str = ""
    raw_params: str = ""
    type_kind: str = ""


@dataclass(frozen=True)
class ClassifiedLine:
    """Result of classifying one line.

    ``text`` holds comment body text, the package name or the dependency name
    depending on the category. Comment open/close lines may also carry content
    (``text`` or ``tag``) found on the same line as the marker. ``opens`` is set
    on a ``COMMENT_CLOSE`` line that opened its block as well, and ``trailing``
    holds the classified code that follows the close marker on the same line.
    """

    category: LineCategory
    text: str = ""
    tag: Optional[Tag] = None
    declaration: Optional[Declaration] = None
    opens: bool = False
    trailing: Optional["ClassifiedLine"] = None

    @property
    def is_declaration(self) -> bool:
        return self.category in _DECLARATION_CATEGORIES


_DECLARATION_CATEGORIES = {
    LineCategory.PACKAGE,
    LineCategory.DEPENDENCY,
    LineCategory.CLASS,
    LineCategory.METHOD,
}

_VISIBILITY = {"public", "protected", "private"}
_MODIFIERS = {
    "static",
    "final",
    "abstract",
    "synchronized",
    "native",
    "default",
    "strictfp",
    "transient",
    "sealed",
    "non-sealed",
}
_NOT_TYPES = {
    "return",
    "new",
    "throw",
    "else",
    "case",
    "assert",
    "yield",
    "goto",
    "do",
    "try",
    "import",
    "package",
    "extends",
    "implements",
    "instanceof",
}
_NOT_NAMES = {
    "if",
    "for",
    "while",
    "switch",
    "catch",
    "synchronized",
    "return",
    "new",
    "throw",
    "super",
    "this",
    "try",
    "do",
    "else",
    "assert",
}

_ANNOTATION = r"@(?!interface\b)[\w.$]+(?:\s*\([^)]*\))?"
_LEADING_ANNOTATIONS_RE = re.compile(rf"^(?:{_ANNOTATION}\s+)+")
_ANNOTATION_LINE_RE = re.compile(rf"^{_ANNOTATION}(?:\s+{_ANNOTATION})*$")
_PACKAGE_RE = re.compile(r"^package\s+([\w.$]+)\s*;?")
_IMPORT_RE = re.compile(r"^import\s+([^;]+?)\s*(?:;.*)?$")
_CLASS_RE = re.compile(
    r"^(?P<modifiers>(?:(?:public|protected|private|abstract|static|final|sealed|non-sealed|strictfp)\s+)*)"
    r"(?P<kind>class|interface|enum|record|@interface)\s+(?P<name>[A-Za-z_$][\w$]*)"
)
_METHOD_HEAD_RE = re.compile(r"^(?:(?P<head>[^(=;{}]*?)\s+)?(?P<name>[A-Za-z_$][\w$]*)\s*\(")
_TYPE_RE = re.compile(r"^[A-Za-z_$][\w$.]*(?:<.*>)?(?:\[\])*(?:\.\.\.)?$")
_TAG_RE = re.compile(r"^@(\w+)\b\s*(.*)$")
_TAIL_RE = re.compile(r"^(?:[{;]|throws\b|default\b)")


def classify_line(line: str, in_comment: bool = False) -> ClassifiedLine:
    """Classify ``line`` given whether a block comment is currently open."""
    stripped = line.strip()

    if stripped.startswith("/*"):
        inner = stripped[2:]
        end = inner.find("*/")
        if end >= 0:
            return _comment_marker_line(
                LineCategory.COMMENT_CLOSE, inner[:end], inner[end + 2 :], opens=True
            )
        return _comment_marker_line(LineCategory.COMMENT_OPEN, inner)

    if in_comment:
        end = stripped.find("*/")
        if end >= 0:
            return _comment_marker_line(LineCategory.COMMENT_CLOSE, stripped[:end], stripped[end + 2 :])
        if not stripped:
            return ClassifiedLine(LineCategory.BLANK)
        if not stripped.startswith("*"):
            # An unterminated block must not swallow the declarations after it.
            recovered = _classify_code(stripped)
            if recovered.is_declaration and _recoverable(recovered, stripped):
                return recovered
        return _comment_content_line(stripped)

    return _classify_code(stripped)


def split_parameters(raw: str) -> List[Tuple[str, str]]:
    """Split a raw parameter list into ``(type, name)`` pairs in signature order."""
    pairs: List[Tuple[str, str]] = []
    for piece in _split_top_level(raw, ","):
        tokens = [
            token
            for token in _split_top_level(piece)
            if not token.startswith("@") and token != "final"
        ]
        if not tokens:
            continue
        if len(tokens) == 1:
            pairs.append((tokens[0], ""))
            continue
        name = tokens[-1]
        var_type = " ".join(tokens[:-1])
        while name.endswith("[]"):
            name = name[:-2]
            var_type += "[]"
        pairs.append((var_type, name))
    return pairs


def _recoverable(line: ClassifiedLine, stripped: str) -> bool:
    """Whether a declaration-shaped line inside an open comment is really code.

    Terminated lines always are. Unterminated class and method signatures need
    a leading modifier, which keeps prose such as ``Computes sum(a, b)`` in
    the comment.
    """
    if stripped.endswith(("{", ";")):
        return True
    if line.category not in (LineCategory.CLASS, LineCategory.METHOD):
        return False
    code = _LEADING_ANNOTATIONS_RE.sub("", stripped, count=1)
    first = code.split(None, 1)[0] if code else ""
    return first in _VISIBILITY or first in _MODIFIERS


def _classify_code(stripped: str) -> ClassifiedLine:
    if not stripped:
        return ClassifiedLine(LineCategory.BLANK)

    match = _PACKAGE_RE.match(stripped)
    if match:
        return ClassifiedLine(LineCategory.PACKAGE, text=match.group(1))

    match = _IMPORT_RE.match(stripped)
    if match:
        return ClassifiedLine(LineCategory.DEPENDENCY, text=match.group(1))

    code = _LEADING_ANNOTATIONS_RE.sub("", stripped, count=1)

    match = _CLASS_RE.match(code)
    if match:
        visibility = _visibility(match.group("modifiers").split())
        declaration = Declaration(
            kind=LineCategory.CLASS,
            name=match.group("name"),
            visibility=visibility,
            type_kind=match.group("kind"),
        )
        return ClassifiedLine(LineCategory.CLASS, declaration=declaration)

    declaration = _match_method(code)
    if declaration is not None:
        return ClassifiedLine(LineCategory.METHOD, declaration=declaration)

    if _ANNOTATION_LINE_RE.match(stripped):
        return ClassifiedLine(LineCategory.ANNOTATION)

    return ClassifiedLine(LineCategory.OTHER)


def _match_method(code: str) -> Optional[Declaration]:
    match = _METHOD_HEAD_RE.match(code)
    if not match:
        return None

    name = match.group("name")
    if name in _NOT_NAMES:
        return None

    raw_params, tail = _take_parenthesised(code, match.end())
    tail = tail.strip()
    if tail and not _TAIL_RE.match(tail):
        return None

    visibility = ""
    saw_modifier = False
    remaining: List[str] = []
    for token in _split_top_level(match.group("head") or ""):
        if token.startswith("@"):
            continue
        if token in _VISIBILITY and not remaining:
            visibility = token
        elif token in _MODIFIERS and not remaining:
            saw_modifier = True
        elif token.startswith("<") and not remaining:
            saw_modifier = True
        else:
            remaining.append(token)

    if len(remaining) > 1:
        return None
    if remaining:
        return_type = remaining[0]
        if return_type in _NOT_TYPES or not _TYPE_RE.match(return_type):
            return None
    elif visibility or saw_modifier or _bare_constructor(raw_params, tail):
        # constructor
        return_type = ""
    else:
        return None

    return Declaration(
        kind=LineCategory.METHOD,
        name=name,
        visibility=visibility,
        return_type=return_type,
        raw_params=raw_params.strip(),
    )


def _bare_constructor(raw_params: str, tail: str) -> bool:
    """Package-private constructor: ``Box(int w) {`` with typed, named parameters."""
    if not tail.startswith(("{", "throws")):
        return False
    for var_type, name in split_parameters(raw_params):
        if not name or not _TYPE_RE.match(var_type.replace(" ", "")):
            return False
    return True


def _take_parenthesised(text: str, start: int) -> Tuple[str, str]:
    """Return the text up to the ``)`` balancing the ``(`` before ``start`` and the rest."""
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return text[start:index], text[index + 1 :]
    return text[start:], ""


def _split_top_level(text: str, separator: str | None = None) -> List[str]:
    """Split on ``separator`` (whitespace when None) outside ``<>`` and ``()``."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0

    def _flush() -> None:
        token = "".join(current).strip()
        current.clear()
        if not token:
            return
        if separator is None and token.startswith("[") and parts:
            parts[-1] += token
        else:
            parts.append(token)

    for char in text:
        if char in "<(":
            depth += 1
        elif char in ">)":
            depth = max(depth - 1, 0)
        if depth == 0 and (char == separator if separator else char.isspace()):
            _flush()
            continue
        current.append(char)
    _flush()
    return parts


def _visibility(tokens: List[str]) -> str:
    for token in tokens:
        if token in _VISIBILITY:
            return token
    return ""


def _strip_stars(text: str) -> str:
    return text.strip().lstrip("*").strip()


def _comment_marker_line(
    category: LineCategory, content: str, after: str = "", *, opens: bool = False
) -> ClassifiedLine:
    content = _strip_stars(content)
    trailing = _classify_code(after.strip()) if after.strip() else None
    tag = _parse_tag(content)
    if tag is not None:
        return ClassifiedLine(category, tag=tag, opens=opens, trailing=trailing)
    return ClassifiedLine(category, text=content, opens=opens, trailing=trailing)


def _comment_content_line(stripped: str) -> ClassifiedLine:
    content = _strip_stars(stripped)
    tag = _parse_tag(content)
    if tag is not None:
        return ClassifiedLine(LineCategory.COMMENT_TAG, tag=tag)
    return ClassifiedLine(LineCategory.COMMENT_BODY, text=content)


def _parse_tag(content: str) -> Optional[Tag]:
    match = _TAG_RE.match(content)
    if not match:
        return None
    marker, rest = match.group(1), match.group(2).strip()
    if marker == "param":
        pieces = rest.split(None, 1)
        name = pieces[0] if pieces else ""
        detail = pieces[1].strip() if len(pieces) > 1 else ""
        return Tag(TagKind.PARAM, name=name, detail=detail, marker=marker)
    if marker == "return":
        return Tag(TagKind.RETURN, name="", detail=rest, marker=marker)
    return Tag(TagKind.OTHER, name="", detail=rest, marker=marker)


__all__ = [
    "ClassifiedLine",
    "Declaration",
    "LineCategory",
    "Tag",
    "TagKind",
    "classify_line",
    "split_parameters",
]
