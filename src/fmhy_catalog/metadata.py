"""Per-document and per-collection item statistics."""

from collections.abc import Iterable, Iterator
from datetime import datetime, timezone

from fmhy_catalog.models import (
    CollectionMetadata,
    DocumentCollection,
    Item,
    Metadata,
    ParsedDocument,
    Section,
)

DEFAULT_VERSION = "1.0"


def iter_items(sections: Iterable[Section]) -> Iterator[Item]:
    """Yield every item under the sections, depth-first and left to right.

    Args:
        sections: Top-level sections of a document.

    Yields:
        Each section's own items, followed by the items of its subsections.
    """
    for section in sections:
        yield from section.items
        for subsection in section.subsections:
            yield from subsection.items


def aggregate(sections: Iterable[Section]) -> Metadata:
    """Count the items and flagged items under the given sections.

    Args:
        sections: Top-level sections of a document.

    Returns:
        Metadata with one count per item and per set flag.
    """
    total = starred = index = cross_references = 0
    for item in iter_items(sections):
        total += 1
        starred += item.is_starred
        index += item.is_index
        cross_references += item.is_cross_reference

    return Metadata(
        total_items=total,
        starred_items=starred,
        index_items=index,
        cross_references=cross_references,
    )


def build_collection(
    documents: Iterable[ParsedDocument],
    version: str = DEFAULT_VERSION,
    now: datetime | None = None,
) -> DocumentCollection:
    """Combine parsed documents with their collection-wide totals.

    Args:
        documents: Successfully parsed documents.
        version: Format version reported in the metadata.
        now: Timestamp for ``last_updated``. Defaults to the current UTC time.

    Returns:
        DocumentCollection holding the documents in the given order.
    """
    documents = tuple(documents)
    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    return DocumentCollection(
        documents=documents,
        metadata=CollectionMetadata(
            total_documents=len(documents),
            total_items=sum(doc.metadata.total_items for doc in documents),
            total_starred_items=sum(doc.metadata.starred_items for doc in documents),
            last_updated=timestamp,
            version=version,
        ),
    )
