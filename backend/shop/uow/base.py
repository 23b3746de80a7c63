"""
Abstract Unit of Work contract shared by the read-write and read-only scopes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class UnitOfWork(ABC):
    """
    Transactional boundary for one service operation.

    A unit of work exposes the repositories bound to its session as
    attributes (``categories``, ``products``, ``users``...). Entering it opens
    the scope; leaving it commits on success (read-write) or always rolls back
    (read-only).
    """

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...

    def repository(self, name: str) -> Any:
        """Return the repository attribute called ``name``.

        :raises AttributeError: When no such repository is wired.
        """
        repo = getattr(self, name, None)
        if repo is None:
            raise AttributeError(f"{type(self).__name__} has no repository {name!r}")
        return repo
