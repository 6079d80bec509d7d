"""Native boundary for clipbridge.

This module binds the Clipper2 shared library with ctypes and decodes the
packed buffers it allocates.

Key responsibilities:
- Locate and bind the library once per process
- Declare exact C signatures of the exported entry points
- Decode engine-owned result buffers and release them exactly once

Key classes:
- NativeEngine: Bound library wrapper
- EngineBackend: Structural type the facade depends on
"""

from clipbridge.native.codec import decode_native_packed, read_packed_header
from clipbridge.native.library import (
    ENV_LIBRARY,
    EngineBackend,
    NativeEngine,
    candidate_names,
    find_library,
    get_engine,
    load_engine,
)

__all__ = [
    "ENV_LIBRARY",
    "EngineBackend",
    "NativeEngine",
    "candidate_names",
    "decode_native_packed",
    "find_library",
    "get_engine",
    "load_engine",
    "read_packed_header",
]
