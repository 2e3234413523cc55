"""Batch driver: discover sources, parse them in a worker pool, write Markdown."""

from __future__ import annotations

import concurrent.futures
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .config import JDocConfig
from .logging import get_logger
from .models import ClassRecord
from .parsing import parse_file
from .render import MarkdownRenderer
from .scanner import SourceScanner

DEFAULT_DESTINATION = Path("generated")
FILES_PER_WORKER = 4


@dataclass
class RenderedClass:
    """A parsed source file together with its rendered document."""

    source: Path
    record: ClassRecord
    file_name: str
    markdown: str


@dataclass
class DocumentationRun:
    """Outcome of documenting a source tree."""

    destination: Path
    written: List[Path] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class Documenter:
    """Coordinates scanning, parsing, rendering and writing for one run."""

    def __init__(
        self,
        config: Optional[JDocConfig] = None,
        *,
        renderer: Optional[MarkdownRenderer] = None,
        scanner: Optional[SourceScanner] = None,
    ) -> None:
        self.config = config or JDocConfig(root=Path.cwd())
        self.renderer = renderer or MarkdownRenderer(self.config.templates_dir)
        self.scanner = scanner or SourceScanner(
            extensions=self.config.extensions,
            exclude_paths=self.config.exclude_paths,
        )
        self.logger = get_logger("documenter")

    def run(self, source: str | Path, destination: str | Path | None = None) -> DocumentationRun:
        """Document every source file under ``source`` into ``destination``."""
        dest = Path(destination) if destination is not None else (
            self.config.destination or DEFAULT_DESTINATION
        )
        paths = self.scanner.scan(source)
        dest.mkdir(parents=True, exist_ok=True)
        run = DocumentationRun(destination=dest)

        if not paths:
            self.logger.info("No source files found")
            return run

        self.logger.info("Documenting %d files from %s", len(paths), source)
        rendered = self.render_all(paths, run)

        written_names: Dict[str, Path] = {}
        for item in rendered:
            if item.file_name in written_names:
                self.logger.warning(
                    "%s from %s overwrites output of %s",
                    item.file_name,
                    item.source,
                    written_names[item.file_name],
                )
            target = dest / item.file_name
            try:
                target.write_text(item.markdown, encoding="utf-8")
            except OSError as exc:
                self.logger.error("Failed to write %s: %s", target, exc)
                run.failures[str(item.source)] = str(exc)
                continue
            written_names[item.file_name] = item.source
            if target not in run.written:
                run.written.append(target)
            self.logger.debug("%s was created", item.file_name)

        return run

    def render_all(self, paths: Sequence[Path], run: DocumentationRun) -> List[RenderedClass]:
        """Parse and render ``paths`` concurrently; results keep input order."""
        results: List[Optional[RenderedClass]] = [None] * len(paths)
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.pool_size(len(paths))) as executor:
            future_to_index = {
                executor.submit(self.document_file, path): index for index, path in enumerate(paths)
            }
            for future in concurrent.futures.as_completed(future_to_index):
                index = future_to_index[future]
                path = paths[index]
                try:
                    results[index] = future.result()
                except (OSError, UnicodeDecodeError) as exc:
                    self.logger.warning("Skipping %s: %s", path, exc)
                    run.failures[str(path)] = str(exc)
        return [item for item in results if item is not None]

    def document_file(self, path: Path) -> RenderedClass:
        record = parse_file(path)
        return RenderedClass(
            source=path,
            record=record,
            file_name=self.renderer.output_name(record),
            markdown=self.renderer.render(record),
        )

    def pool_size(self, file_count: int) -> int:
        if self.config.workers:
            return self.config.workers
        return max(1, math.ceil(file_count / FILES_PER_WORKER))


__all__ = ["Documenter", "DocumentationRun", "RenderedClass"]
