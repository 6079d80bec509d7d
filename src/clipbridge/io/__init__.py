"""Path file I/O layer for clipbridge.

This module handles reading and writing JSON path documents, providing a
clean abstraction between files on disk and the domain models.

Key classes:
- PathReader: Load path documents
- PathWriter: Save path documents
- PathsDocument: Validated document model
"""

from clipbridge.io.converter import PathsDocument, document_to_paths, paths_to_document
from clipbridge.io.reader import PathReader
from clipbridge.io.writer import PathWriter

__all__ = [
    "PathReader",
    "PathWriter",
    "PathsDocument",
    "document_to_paths",
    "paths_to_document",
]
