"""Documentation records produced by the parser and consumed by renderers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Param:
    """A declared method parameter with its documented description."""

    name: str
    var_type: str
    desc: str = ""


@dataclass(frozen=True)
class Method:
    """A method or constructor signature merged with its doc comment."""

    name: str
    privacy: str = ""
    description: str = ""
    return_type: str = ""
    parameters: List[Param] = field(default_factory=list)
    return_desc: str = ""


@dataclass
class ClassRecord:
    """Everything documented about the single class declared in one file."""

    class_name: str = ""
    access: str = ""
    package_name: str = ""
    description: str = ""
    dependencies: List[str] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)
    kind: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ClassRecord", "Method", "Param"]
