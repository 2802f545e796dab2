"""Data models for parsed FMHY catalog documents."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LinkType(str, Enum):
    """Destination category of a markdown link."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    GITHUB = "github"
    DISCORD = "discord"
    OTHER = "other"


@dataclass(frozen=True)
class Link:
    """A markdown hyperlink found in an item line."""

    url: str
    text: str
    type: LinkType

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the link."""
        return {"url": self.url, "text": self.text, "type": self.type.value}


@dataclass(frozen=True)
class Item:
    """One catalog entry parsed from a bullet line."""

    name: str
    description: str
    links: tuple[Link, ...]
    is_starred: bool
    is_index: bool
    is_cross_reference: bool
    raw_content: str

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the item."""
        return {
            "name": self.name,
            "description": self.description,
            "links": [link.to_dict() for link in self.links],
            "isStarred": self.is_starred,
            "isIndex": self.is_index,
            "isCrossReference": self.is_cross_reference,
            "rawContent": self.raw_content,
        }


@dataclass(frozen=True)
class Subsection:
    """Second-level grouping. Holds items only."""

    title: str
    items: tuple[Item, ...] = ()
    level: int = field(default=2, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation, shaped like a section without children."""
        return {
            "title": self.title,
            "level": self.level,
            "items": [item.to_dict() for item in self.items],
            "subsections": [],
        }


@dataclass(frozen=True)
class Section:
    """Top-level grouping opened by a main-section marker."""

    title: str
    items: tuple[Item, ...] = ()
    subsections: tuple[Subsection, ...] = ()
    level: int = field(default=1, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the section."""
        return {
            "title": self.title,
            "level": self.level,
            "items": [item.to_dict() for item in self.items],
            "subsections": [subsection.to_dict() for subsection in self.subsections],
        }


@dataclass(frozen=True)
class Metadata:
    """Item counts for a single document."""

    total_items: int = 0
    starred_items: int = 0
    index_items: int = 0
    cross_references: int = 0

    def to_dict(self) -> dict[str, int]:
        """Return the wire representation of the counts."""
        return {
            "totalItems": self.total_items,
            "starredItems": self.starred_items,
            "indexItems": self.index_items,
            "crossReferences": self.cross_references,
        }


@dataclass(frozen=True)
class ParsedDocument:
    """Structured result for one markdown document."""

    filename: str
    title: str
    sections: tuple[Section, ...]
    metadata: Metadata

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the document."""
        return {
            "filename": self.filename,
            "title": self.title,
            "sections": [section.to_dict() for section in self.sections],
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class CollectionMetadata:
    """Totals across every document in a collection."""

    total_documents: int
    total_items: int
    total_starred_items: int
    last_updated: str
    version: str

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the totals."""
        return {
            "totalDocuments": self.total_documents,
            "totalItems": self.total_items,
            "totalStarredItems": self.total_starred_items,
            "lastUpdated": self.last_updated,
            "version": self.version,
        }


@dataclass(frozen=True)
class DocumentCollection:
    """Parsed documents combined with their collection totals."""

    documents: tuple[ParsedDocument, ...]
    metadata: CollectionMetadata

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the collection."""
        return {
            "documents": [document.to_dict() for document in self.documents],
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class SearchResult:
    """Represents an item search result."""

    filename: str
    section: str
    subsection: str | None
    name: str
    description: str
    snippet: str
    score: float
    is_starred: bool
