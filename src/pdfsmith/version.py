"""Version lookup for the installed distribution."""

from __future__ import annotations

from importlib import metadata


DISTRIBUTION = "pdfsmith"
UNKNOWN_VERSION = "0+unknown"


def get_version() -> str:
    """Return the pdfsmith version recorded in the installed metadata.

    Source checkouts that were never installed report ``0+unknown``.
    """
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


__all__ = ["DISTRIBUTION", "UNKNOWN_VERSION", "get_version"]
