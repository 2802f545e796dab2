"""Indexer for directories of FMHY markdown documents."""

import logging
from collections.abc import Sequence
from pathlib import Path

from fmhy_catalog.database import CatalogDatabase
from fmhy_catalog.metadata import DEFAULT_VERSION, build_collection
from fmhy_catalog.models import DocumentCollection, ParsedDocument
from fmhy_catalog.parser import DocumentParser

logger = logging.getLogger(__name__)


class CatalogIndexer:
    """Parses a local directory of catalog documents and stores their items."""

    def __init__(self, database: CatalogDatabase | None = None, version: str = DEFAULT_VERSION) -> None:
        """Initialise indexer with an optional database.

        Args:
            database: CatalogDatabase for storing items. Only needed for indexing.
            version: Format version reported in collection metadata.
        """
        self.database = database
        self.version = version
        self.parser = DocumentParser()

    def load_directory(self, docs_path: Path, filenames: Sequence[str] | None = None) -> DocumentCollection:
        """Parse the documents of a directory into a collection.

        Args:
            docs_path: Directory containing the markdown files.
            filenames: Files to parse, in order. Defaults to every ``*.md`` file, sorted.

        Returns:
            DocumentCollection of the documents that parsed successfully.
        """
        documents = self._parse_directory(docs_path, filenames)
        return build_collection(documents, version=self.version)

    def index_from_path(self, docs_path: Path, filenames: Sequence[str] | None = None) -> int:
        """Parse a directory and store every document in the database.

        Args:
            docs_path: Directory containing the markdown files.
            filenames: Files to parse, in order. Defaults to every ``*.md`` file, sorted.

        Returns:
            Number of documents indexed.

        Raises:
            ValueError: If the indexer has no database.
        """
        if self.database is None:
            msg = "Indexing requires a database"
            raise ValueError(msg)

        indexed_count = 0
        for document in self._parse_directory(docs_path, filenames):
            self.database.upsert_document(document)
            indexed_count += 1
            logger.debug("Indexed %s with %d items", document.filename, document.metadata.total_items)

        logger.info("Successfully indexed %d documents", indexed_count)
        return indexed_count

    def rebuild_index(self, docs_path: Path, filenames: Sequence[str] | None = None) -> int:
        """Clear the existing index and rebuild it from a directory.

        Args:
            docs_path: Directory containing the markdown files.
            filenames: Files to parse, in order.

        Returns:
            Number of documents indexed.

        Raises:
            ValueError: If the indexer has no database.
        """
        if self.database is None:
            msg = "Indexing requires a database"
            raise ValueError(msg)

        logger.info("Clearing existing index...")
        self.database.clear()
        return self.index_from_path(docs_path, filenames)

    def _resolve_files(self, docs_path: Path, filenames: Sequence[str] | None) -> list[Path]:
        """List the files to parse, dropping requested files that are missing.

        Raises:
            ValueError: If the documentation path does not exist.
        """
        if not docs_path.exists():
            msg = f"Documentation path does not exist: {docs_path}"
            raise ValueError(msg)

        if filenames is None:
            return sorted(docs_path.glob("*.md"))

        files = []
        for filename in filenames:
            file_path = docs_path / filename
            if file_path.is_file():
                files.append(file_path)
            else:
                logger.warning("Document not found: %s", file_path)
        return files

    def _parse_directory(self, docs_path: Path, filenames: Sequence[str] | None) -> list[ParsedDocument]:
        files = self._resolve_files(docs_path, filenames)
        logger.info("Found %d markdown files to parse", len(files))

        documents = []
        for file_path in files:
            document = self.parser.parse_file(file_path)
            if document is None:
                logger.warning("Failed to parse: %s", file_path)
                continue
            documents.append(document)
        return documents
