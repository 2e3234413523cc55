"""Line-oriented parser turning Java-family source into documentation records."""

from __future__ import annotations

from .accumulator import CommentAccumulator, CommentState, PendingDoc
from .assembler import RecordAssembler, parse, parse_file
from .binder import BoundClass, DeclarationBinder, bind_class, bind_method
from .classifier import (
    ClassifiedLine,
    Declaration,
    LineCategory,
    Tag,
    TagKind,
    classify_line,
    split_parameters,
)

__all__ = [
    "BoundClass",
    "ClassifiedLine",
    "CommentAccumulator",
    "CommentState",
    "Declaration",
    "DeclarationBinder",
    "LineCategory",
    "PendingDoc",
    "RecordAssembler",
    "Tag",
    "TagKind",
    "bind_class",
    "bind_method",
    "classify_line",
    "parse",
    "parse_file",
    "split_parameters",
]
