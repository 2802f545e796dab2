"""Parser for FMHY-style markdown catalog documents."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from fmhy_catalog.items import is_skippable, parse_item
from fmhy_catalog.metadata import aggregate
from fmhy_catalog.models import Item, ParsedDocument, Section, Subsection

logger = logging.getLogger(__name__)

SECTION_MARKER = "# ►"
SUBSECTION_MARKER = "## ▷"
ITEM_PREFIXES = ("*", "-")


@dataclass
class _OpenSubsection:
    title: str
    items: list[Item] = field(default_factory=list)

    def close(self) -> Subsection:
        return Subsection(title=self.title, items=tuple(self.items))


@dataclass
class _OpenSection:
    title: str
    items: list[Item] = field(default_factory=list)
    subsections: list[Subsection] = field(default_factory=list)

    def close(self) -> Section:
        return Section(title=self.title, items=tuple(self.items), subsections=tuple(self.subsections))


class _DocumentBuilder:
    """Line-by-line state machine holding the open section and subsection."""

    def __init__(self) -> None:
        self.sections: list[Section] = []
        self.current_section: _OpenSection | None = None
        self.current_subsection: _OpenSubsection | None = None

    def feed(self, line: str) -> None:
        """Apply one trimmed line to the open state.

        Args:
            line: Trimmed source line.
        """
        if is_skippable(line):
            return

        if line.startswith(SECTION_MARKER):
            self._close_section()
            self.current_section = _OpenSection(title=line[len(SECTION_MARKER) :].strip())
            return

        if line.startswith(SUBSECTION_MARKER):
            if self.current_section is not None:
                self._close_subsection()
                self.current_subsection = _OpenSubsection(title=line[len(SUBSECTION_MARKER) :].strip())
            return

        if line.startswith(ITEM_PREFIXES):
            item = parse_item(line)
            if item is None:
                return
            if self.current_subsection is not None:
                self.current_subsection.items.append(item)
            elif self.current_section is not None:
                self.current_section.items.append(item)

    def finish(self) -> tuple[Section, ...]:
        """Flush any open state and return the completed sections."""
        self._close_section()
        return tuple(self.sections)

    def _close_subsection(self) -> None:
        if self.current_section is not None and self.current_subsection is not None:
            self.current_section.subsections.append(self.current_subsection.close())
        self.current_subsection = None

    def _close_section(self) -> None:
        self._close_subsection()
        if self.current_section is not None:
            self.sections.append(self.current_section.close())
        self.current_section = None


def derive_title(filename: str) -> str:
    """Derive a display title from a document filename.

    Args:
        filename: Document filename, e.g. ``video-tools.md``.

    Returns:
        Title with the extension dropped, hyphens turned into spaces and the
        first letter of each word upper-cased, e.g. ``Video Tools``.
    """
    stem = filename[: -len(".md")] if filename.endswith(".md") else filename
    return re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), stem.replace("-", " "))


def parse_markdown_document(content: str, filename: str) -> ParsedDocument:
    """Parse one markdown document into its section tree and counts.

    Args:
        content: Full document text.
        filename: Name of the source document.

    Returns:
        ParsedDocument, possibly with no sections for empty or unstructured input.
    """
    builder = _DocumentBuilder()
    for line in content.split("\n"):
        builder.feed(line.strip())
    sections = builder.finish()

    return ParsedDocument(
        filename=filename,
        title=derive_title(filename),
        sections=sections,
        metadata=aggregate(sections),
    )


class DocumentParser:
    """Parses FMHY markdown documents from text or from disk."""

    def parse_text(self, content: str, filename: str) -> ParsedDocument:
        """Parse document text.

        Args:
            content: Full document text.
            filename: Name of the source document.

        Returns:
            ParsedDocument instance.
        """
        return parse_markdown_document(content, filename)

    def parse_file(self, file_path: Path) -> ParsedDocument | None:
        """Read and parse a markdown file.

        Args:
            file_path: Path to the markdown file.

        Returns:
            ParsedDocument instance or None if reading or parsing fails.
        """
        try:
            source = file_path.read_text(encoding="utf-8")
            return self.parse_text(source, file_path.name)
        except Exception:
            logger.debug("Could not parse %s", file_path, exc_info=True)
            return None
