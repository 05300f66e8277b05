"""Backends subpackage for ason.

The base install provides the standard-library backends
(``StdlibEncodeBackend`` / ``StdlibDecodeBackend``), built on the ``json``
module.  The orjson backends are available via an extra::

    pip install ason[orjson]

All backends satisfy the ``EncodeBackend`` / ``DecodeBackend`` Protocols
structurally.
"""

from ason.backends.stdlib import JsonValue, StdlibDecodeBackend, StdlibEncodeBackend

# The orjson module itself is imported lazily on instantiation, so these names
# are always importable; instantiating them without orjson raises ImportError.
from ason.backends.orjson import OrjsonDecodeBackend, OrjsonEncodeBackend

__all__ = [
    "JsonValue",
    "OrjsonDecodeBackend",
    "OrjsonEncodeBackend",
    "StdlibDecodeBackend",
    "StdlibEncodeBackend",
]
