"""Exception hierarchy for clipbridge."""


class ClipBridgeError(Exception):
    """Base exception for all clipbridge errors."""

    pass


class NativeLibraryError(ClipBridgeError):
    """Errors related to locating or binding the native engine."""

    pass


class LibraryNotFoundError(NativeLibraryError):
    """No candidate shared library could be located."""

    def __init__(self, candidates: list[str]) -> None:
        self.candidates = candidates
        super().__init__(
            "Clipper2 shared library not found (tried: "
            f"{', '.join(candidates)}). Set CLIPBRIDGE_LIBRARY or pass a library path."
        )


class LibraryLoadError(NativeLibraryError):
    """A shared library was found but could not be loaded or bound."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load native library '{path}': {reason}")


class EngineError(ClipBridgeError):
    """Errors reported by the native engine."""

    pass


# Status codes returned by BooleanOpD
BOOLEAN_STATUS_MESSAGES: dict[int, str] = {
    -1: "clipping execution failed",
    -3: "invalid fill rule",
    -4: "invalid clip type",
    -5: "precision out of range",
}


class BooleanOperationError(EngineError):
    """Boolean operation returned a nonzero status code."""

    def __init__(self, status: int, clip_type: str) -> None:
        self.status = status
        self.clip_type = clip_type
        description = BOOLEAN_STATUS_MESSAGES.get(status, "unknown error")
        super().__init__(
            f"Boolean operation '{clip_type}' failed with status {status}: {description}"
        )


class StorageError(ClipBridgeError):
    """Errors related to growable buffer storage."""

    pass


class BufferAllocationError(StorageError, MemoryError):
    """Buffer growth could not allocate the requested capacity."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        super().__init__(f"Could not allocate buffer of {capacity} doubles")


class BufferBorrowedError(StorageError):
    """Buffer was asked to reallocate while a raw pointer is on loan."""

    def __init__(self) -> None:
        super().__init__("Cannot grow a buffer while its pointer is borrowed")


class ContractViolationError(ClipBridgeError, IndexError):
    """Caller broke an access contract on a path or collection."""

    pass


class PathIndexError(ContractViolationError):
    """Index outside the logical region of a Path or PathCollection."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Index {index} out of range for size {size}")


class NativeFormatError(ClipBridgeError):
    """Native packed buffer is malformed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed packed buffer: {reason}")


class PathFileError(ClipBridgeError):
    """Errors related to reading or writing path files."""

    pass


class PathFileLoadError(PathFileError):
    """Error loading a path file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load paths from '{path}': {reason}")


class PathFileSaveError(PathFileError):
    """Error saving a path file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save paths to '{path}': {reason}")
