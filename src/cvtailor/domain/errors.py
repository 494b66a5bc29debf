"""Error kinds surfaced by preview channels.

Reconciliation itself is total; only the collaborators behind it can fail.
"""

from __future__ import annotations


class CvTailorError(RuntimeError):
    """Base class for cvtailor runtime errors."""


class CollaboratorUnavailableError(CvTailorError):
    """A remote collaborator failed or answered with a non-success status."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class RulesEngineUnavailable(CollaboratorUnavailableError):  # noqa: N818
    """The structured-preview call to the rules engine failed."""


class LibraryUnavailable(CollaboratorUnavailableError):  # noqa: N818
    """The library collaborator failed to load."""


class RenderUnavailable(CollaboratorUnavailableError):  # noqa: N818
    """The document-render call failed."""


class VariantStoreError(CvTailorError):
    """Reading or writing a persisted variant failed."""


class VariantNotFoundError(VariantStoreError, LookupError):
    """Requested variant does not exist."""

    def __init__(self, variant_id: str) -> None:
        super().__init__(f"CV variant not found: {variant_id}")
        self.variant_id = variant_id
