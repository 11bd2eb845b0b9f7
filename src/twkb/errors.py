"""Exception taxonomy for the TWKB codec.

Every error aborts the whole read or write; no partial geometry or buffer
is handed back to the caller.
"""

from __future__ import annotations


class TwkbError(ValueError):
    """Base class for all codec errors."""


class InputError(TwkbError):
    """Input cannot be read at all (empty buffer, bad hex, bad GeoJSON)."""


class TruncatedInput(TwkbError):
    """The byte cursor ran out of data in the middle of a read."""


class UnsupportedGeometryType(TwkbError):
    """Type code outside 1..7, or a geometry variant outside the closed set."""


class PrecisionOutOfRange(TwkbError):
    """Decimal digit count does not fit its header bit field."""


class InvalidOperand(TwkbError):
    """Value cannot be written by the requested primitive."""


class GeometryError(TwkbError):
    """Geometry cannot be represented in TWKB."""
