"""Port for reading the career library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cvtailor.domain.model import Library


@runtime_checkable
class LibraryReader(Protocol):
    """Read-only access to the current library snapshot.

    Implementations raise ``LibraryUnavailable`` when the snapshot cannot be loaded.
    """

    async def load(self) -> Library: ...
