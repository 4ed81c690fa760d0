"""
Error taxonomy for a scan.

Fatal kinds derive from ScanError and abort the scan; the caller turns them
into a fallback result (see scan.fallback_result). ParsingAnomaly is the only
non-fatal kind: it never leaves the reconciliation engine.
"""
from __future__ import annotations


class ScanError(RuntimeError):
    """Base class for everything that aborts a scan."""


class MissingCredentials(ScanError):
    """A collaborator key is not configured. Raised before any network call."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        names = ", ".join(k.upper() for k in self.missing)
        super().__init__(f"Missing credentials: {names}. Set them in .env or the environment.")


class UploadFailure(ScanError):
    """The image host rejected the upload or returned no public URL."""


class IdentificationFailure(ScanError):
    """Visual identification returned no usable match."""


class SearchFailure(ScanError):
    """The shopping search returned an error payload or a non-200 response."""


class NoQualifyingCandidate(ScanError):
    """Search succeeded but no listing survived the trust veto."""


class ParsingAnomaly(ValueError):
    """A single record's field could not be interpreted cleanly (non-fatal)."""
