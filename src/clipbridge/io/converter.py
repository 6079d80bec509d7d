"""Converters between path documents and domain models.

A path document is the JSON form of a PathCollection:

    {"paths": [[x0, y0, x1, y1, ...], ...]}

Each path may also be written as a list of ``[x, y]`` pairs; pairs are
flattened on load.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from clipbridge.domain.path import Path, PathCollection


class PathsDocument(BaseModel):
    """Validated JSON document holding flat coordinate lists."""

    paths: list[list[float]] = Field(
        default_factory=list,
        description="One flat [x0, y0, x1, y1, ...] list per path",
    )

    @field_validator("paths", mode="before")
    @classmethod
    def _flatten_pairs(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        flattened = []
        for path in value:
            if isinstance(path, list) and path and isinstance(path[0], (list, tuple)):
                flattened.append([coord for pair in path for coord in pair])
            else:
                flattened.append(path)
        return flattened

    @field_validator("paths")
    @classmethod
    def _even_lengths(cls, value: list[list[float]]) -> list[list[float]]:
        for index, coords in enumerate(value):
            if len(coords) % 2:
                raise ValueError(f"path {index} has an odd number of coordinates")
        return value


def document_to_paths(document: PathsDocument) -> PathCollection:
    """Convert a validated document to a PathCollection.

    Args:
        document: Parsed path document

    Returns:
        Collection with one Path per document entry
    """
    return PathCollection.from_paths(Path.from_coords(coords) for coords in document.paths)


def paths_to_document(paths: PathCollection) -> PathsDocument:
    """Convert a PathCollection to a document ready for serialization."""
    return PathsDocument(paths=paths.to_coords())
