"""Fold classified lines into the single :class:`ClassRecord` for one file."""

from __future__ import annotations

from pathlib import Path

from ..models import ClassRecord, Method
from .accumulator import CommentAccumulator
from .binder import Bound, BoundClass, DeclarationBinder
from .classifier import ClassifiedLine, LineCategory, classify_line


class RecordAssembler:
    """Owns the class record while a file is being parsed."""

    def __init__(self) -> None:
        self._record = ClassRecord()

    def add_line(self, line: ClassifiedLine) -> None:
        if line.category is LineCategory.PACKAGE:
            self._record.package_name = line.text
        elif line.category is LineCategory.DEPENDENCY:
            self._record.dependencies.append(line.text)

    def add_bound(self, bound: Bound) -> None:
        if isinstance(bound, BoundClass):
            self._record.class_name = bound.name
            self._record.access = bound.access
            self._record.description = bound.description
            self._record.kind = bound.type_kind
        elif isinstance(bound, Method):
            self._record.methods.append(bound)

    def finish(self, filename: str | None = None) -> ClassRecord:
        record = self._record
        if not record.class_name and filename:
            record.class_name = Path(filename).stem
        self._record = ClassRecord()
        return record


def parse(text: str, filename: str | None = None) -> ClassRecord:
    """Parse one source file's text into its documentation record.

    This function is total: it never raises for any string input. Malformed
    comments, unmatched tags and unrecognised lines degrade to empty or default
    fields, and the worst case is a ``ClassRecord`` with every field empty.
    When no class declaration is found, ``filename`` (if given) supplies the
    class name via its base name without extension.
    """
    accumulator = CommentAccumulator()
    binder = DeclarationBinder()
    assembler = RecordAssembler()

    def _apply(line: ClassifiedLine) -> None:
        assembler.add_line(line)
        bound = binder.bind(line)
        if bound is not None:
            assembler.add_bound(bound)

    for raw in text.lstrip("\ufeff").splitlines():
        line = classify_line(raw, in_comment=accumulator.in_comment)
        ready = accumulator.feed(line)
        if ready is not None and line.is_declaration:
            binder.offer(ready)
            ready = None

        _apply(line)

        if ready is not None:
            binder.offer(ready)
        if line.trailing is not None:
            # code after "*/" on the same line, e.g. "/** Getter. */ int size() {"
            _apply(line.trailing)

    accumulator.finish()
    return assembler.finish(filename)


def parse_file(path: Path) -> ClassRecord:
    """Read ``path`` as UTF-8 and parse it. I/O and decoding errors propagate."""
    text = path.read_text(encoding="utf-8")
    return parse(text, filename=path.name)


__all__ = ["RecordAssembler", "parse", "parse_file"]
