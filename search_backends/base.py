"""
Abstract bases for the two search collaborators a scan talks to.

Backends only move data: they return raw titles / raw shopping records and
leave every judgement about them to the reconciliation engine.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class VisualSearchBackend(ABC):
    """Image URL → visually matching product titles, best first."""

    @abstractmethod
    async def identify(self, image_url: str) -> list[str]:
        """
        Return raw titles of the visual matches for image_url.
        Raises IdentificationFailure when there are none.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name for logs."""
        ...


class ShoppingSearchBackend(ABC):
    """Text query → raw shopping-result records."""

    @abstractmethod
    async def search(
        self,
        query: str,
        region: str,
        currency: str,
    ) -> list[dict]:
        """
        Return raw shopping records for query in the given region/currency.
        Raises SearchFailure on an error payload or HTTP failure.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name for logs."""
        ...
