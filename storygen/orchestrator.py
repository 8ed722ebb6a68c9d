"""Batch pipeline: discover component files and write their stories."""

from __future__ import annotations

import glob
from pathlib import Path
from typing import List, Optional

from .analyzers import extract_properties, extract_tag
from .config import GeneratorConfig
from .diagnostics import ERROR, INFO, WARNING, DiagnosticEvent, DiagnosticSink, LoggingSink
from .logging import get_logger
from .models import GenerationResult
from .rendering import StoryRenderer


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` groups into separate glob patterns."""
    start = pattern.find("{")
    while start != -1:
        end = _matching_brace(pattern, start)
        if end is None:
            return [pattern]
        options = _split_options(pattern[start + 1 : end])
        if len(options) > 1:
            prefix, suffix = pattern[:start], pattern[end + 1 :]
            expanded: List[str] = []
            for option in options:
                for candidate in expand_braces(f"{prefix}{option}{suffix}"):
                    if candidate not in expanded:
                        expanded.append(candidate)
            return expanded
        start = pattern.find("{", start + 1)
    return [pattern]


def _matching_brace(pattern: str, start: int) -> Optional[int]:
    depth = 0
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def _split_options(body: str) -> List[str]:
    options: List[str] = []
    depth = 0
    current: List[str] = []
    for char in body:
        if char == "," and depth == 0:
            options.append("".join(current))
            current = []
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current.append(char)
    options.append("".join(current))
    return options


def component_name_for(path: Path, source_marker: str) -> str:
    """``widget.ce.ts`` -> ``widget``: drop the extension, then the marker."""
    stem = path.stem
    if source_marker and stem.endswith(source_marker):
        return stem[: -len(source_marker)]
    return stem


class Orchestrator:
    """Runs discovery, extraction, rendering and writing for a file pattern."""

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        renderer: StoryRenderer | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self.config = config or GeneratorConfig(root=Path.cwd())
        self.renderer = renderer or StoryRenderer(
            self.config.templates_dir,
            title_prefix=self.config.title_prefix,
            source_marker=self.config.source_marker,
            docs_tag=self.config.docs_tag,
        )
        self.logger = get_logger("orchestrator")
        self.sink = sink or LoggingSink(self.logger)

    def run(self, pattern: str | None = None) -> GenerationResult:
        """Generate stories for every file matching ``pattern``.

        Per-file failures are reported and counted; only pattern expansion
        errors escape.
        """
        pattern = pattern or self.config.pattern
        if not pattern:
            raise ValueError("No file pattern given and none configured")

        self._emit(INFO, f"Searching for components with pattern: {pattern}")
        files = self.discover(pattern)
        result = GenerationResult()

        if not files:
            self._emit(WARNING, f'No files found matching pattern "{pattern}"')
            return result

        self._emit(INFO, f"Found {len(files)} files to process...")
        for path in files:
            try:
                output_path = self.process_file(path)
            except Exception as exc:
                self._emit(ERROR, f"Error processing {path}: {exc}", path)
                result.error_count += 1
                continue
            if output_path is None:
                result.error_count += 1
            else:
                result.success_count += 1

        self._emit(
            INFO,
            f"Processing complete: {result.success_count} files generated successfully, "
            f"{result.error_count} errors.",
        )
        return result

    async def run_async(self, pattern: str | None = None) -> GenerationResult:
        """Awaitable form of :meth:`run` for build pipeline hooks."""
        return self.run(pattern)

    def discover(self, pattern: str) -> List[Path]:
        root = self.config.root
        found: set[Path] = set()
        for expanded in expand_braces(pattern):
            if Path(expanded).is_absolute():
                matches = [Path(match) for match in glob.glob(expanded, recursive=True)]
            else:
                matches = [root / match for match in glob.glob(expanded, root_dir=root, recursive=True)]
            found.update(matches)
        self.logger.debug("Pattern %s matched %d paths", pattern, len(found))
        return sorted(found)

    def process_file(self, path: Path) -> Optional[Path]:
        """Write the story for ``path``; ``None`` when no tag was found."""
        source = path.read_text(encoding="utf-8")
        component_name = component_name_for(path, self.config.source_marker)

        tag_name = extract_tag(
            source,
            registration_function=self.config.registration_function,
            dialect=self.config.dialect,
            sink=self.sink,
            source_path=path,
        )
        if not tag_name:
            self._emit(WARNING, f"Could not find custom element tag in {path}", path)
            return None

        properties = extract_properties(
            source,
            decorators=frozenset(self.config.reactive_decorators),
            dialect=self.config.dialect,
            sink=self.sink,
            source_path=path,
        )
        self.logger.debug("Extracted %d properties from %s", len(properties), path)
        content = self.renderer.render(component_name, tag_name, properties)

        output_path = path.parent / f"{component_name}{self.config.output_suffix}"
        output_path.write_text(content, encoding="utf-8")
        self._emit(INFO, f"Generated Storybook file: {output_path}", output_path)
        return output_path

    def _emit(self, level: str, message: str, file: Path | None = None) -> None:
        self.sink(DiagnosticEvent(level, message, file))


__all__ = ["Orchestrator", "component_name_for", "expand_braces"]
