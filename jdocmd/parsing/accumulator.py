"""State machine that collects doc-comment text between open and close markers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional

from ..logging import get_logger
from .classifier import ClassifiedLine, LineCategory, Tag, TagKind


@dataclass
class PendingDoc:
    """Description text and tags gathered from one comment block."""

    description: str = ""
    tags: List[Tag] = field(default_factory=list)

    def add_text(self, text: str) -> None:
        """Append body text; after the first tag it continues that tag's detail."""
        if not text:
            return
        if self.tags:
            last = self.tags[-1]
            detail = f"{last.detail} {text}" if last.detail else text
            self.tags[-1] = replace(last, detail=detail)
            return
        self.description = f"{self.description}\n{text}" if self.description else text

    def add_tag(self, tag: Tag) -> None:
        self.tags.append(tag)

    def param_descriptions(self) -> Dict[str, str]:
        descriptions: Dict[str, str] = {}
        for tag in self.tags:
            if tag.kind is TagKind.PARAM and tag.name and tag.name not in descriptions:
                descriptions[tag.name] = tag.detail
        return descriptions

    def return_detail(self) -> str:
        for tag in self.tags:
            if tag.kind is TagKind.RETURN:
                return tag.detail
        return ""


class CommentState(str, Enum):
    IDLE = "idle"
    OPEN = "open"


class CommentAccumulator:
    """Buffers comment lines and hands back a finished :class:`PendingDoc`.

    ``feed`` returns the completed block when a line closes it, either with an
    explicit close marker or implicitly when a declaration shows up before the
    block was terminated. A second open marker inside an open block discards
    the unfinished block and starts a fresh one.
    """

    def __init__(self) -> None:
        self._state = CommentState.IDLE
        self._pending: Optional[PendingDoc] = None
        self.logger = get_logger("parsing")

    @property
    def state(self) -> CommentState:
        return self._state

    @property
    def in_comment(self) -> bool:
        return self._state is CommentState.OPEN

    def feed(self, line: ClassifiedLine) -> Optional[PendingDoc]:
        category = line.category

        if category is LineCategory.COMMENT_OPEN:
            self._open()
            self._absorb(line)
            return None

        if category is LineCategory.COMMENT_CLOSE:
            if line.opens or self._pending is None:
                self._open()
            self._absorb(line)
            return self._close()

        if not self.in_comment:
            return None

        if category in (LineCategory.COMMENT_BODY, LineCategory.COMMENT_TAG):
            self._absorb(line)
            return None

        if line.is_declaration:
            self.logger.debug("Comment block closed implicitly by %s line", category.value)
            return self._close()

        return None

    def finish(self) -> None:
        """Drop an unterminated block at end of input."""
        if self.in_comment:
            self.logger.debug("Discarding unterminated comment block at end of input")
        self._state = CommentState.IDLE
        self._pending = None

    def _open(self) -> None:
        if self.in_comment:
            self.logger.debug("Comment opened inside an open block; discarding the earlier block")
        self._state = CommentState.OPEN
        self._pending = PendingDoc()

    def _absorb(self, line: ClassifiedLine) -> None:
        if self._pending is None:
            return
        if line.tag is not None:
            self._pending.add_tag(line.tag)
        else:
            self._pending.add_text(line.text)

    def _close(self) -> Optional[PendingDoc]:
        pending = self._pending
        self._state = CommentState.IDLE
        self._pending = None
        return pending


__all__ = ["CommentAccumulator", "CommentState", "PendingDoc"]
