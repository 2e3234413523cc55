"""Attach finished comment blocks to the declaration they document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..logging import get_logger
from ..models import Method, Param
from .accumulator import PendingDoc
from .classifier import ClassifiedLine, Declaration, LineCategory, split_parameters

_TRANSPARENT = {LineCategory.BLANK, LineCategory.ANNOTATION}


@dataclass(frozen=True)
class BoundClass:
    """Class-level header fields produced by binding a class declaration."""

    name: str
    access: str = ""
    description: str = ""
    type_kind: str = "class"


Bound = Union[BoundClass, Method]


def bind_method(declaration: Declaration, doc: Optional[PendingDoc] = None) -> Method:
    """Merge a method signature with its (optional) doc comment.

    Parameters come from the signature, in signature order. ``@param`` tags only
    supply descriptions and are matched by exact name; tags naming a parameter
    that is not declared are dropped.
    """
    descriptions = doc.param_descriptions() if doc is not None else {}
    parameters = [
        Param(name=name, var_type=var_type, desc=descriptions.get(name, "") if name else "")
        for var_type, name in split_parameters(declaration.raw_params)
    ]
    return Method(
        name=declaration.name,
        privacy=declaration.visibility,
        description=doc.description if doc is not None else "",
        return_type=declaration.return_type,
        parameters=parameters,
        return_desc=doc.return_detail() if doc is not None else "",
    )


def bind_class(declaration: Declaration, doc: Optional[PendingDoc] = None) -> BoundClass:
    return BoundClass(
        name=declaration.name,
        access=declaration.visibility,
        description=doc.description if doc is not None else "",
        type_kind=declaration.type_kind or "class",
    )


class DeclarationBinder:
    """Holds at most one ready comment block until the next declaration arrives.

    Only blank and annotation lines may sit between a comment block and the
    declaration it documents. Any other line drops the ready block.
    """

    def __init__(self) -> None:
        self._ready: Optional[PendingDoc] = None
        self.logger = get_logger("parsing")

    @property
    def ready(self) -> Optional[PendingDoc]:
        return self._ready

    def offer(self, doc: PendingDoc) -> None:
        if self._ready is not None:
            self.logger.debug("Dropping unattached comment block")
        self._ready = doc

    def bind(self, line: ClassifiedLine) -> Optional[Bound]:
        category = line.category
        if category in _TRANSPARENT:
            return None

        doc, self._ready = self._ready, None
        declaration = line.declaration
        if declaration is not None and category is LineCategory.CLASS:
            return bind_class(declaration, doc)
        if declaration is not None and category is LineCategory.METHOD:
            return bind_method(declaration, doc)

        if doc is not None:
            self.logger.debug("Comment block not followed by a declaration (%s line)", category.value)
        return None


__all__ = ["Bound", "BoundClass", "DeclarationBinder", "bind_class", "bind_method"]
