"""Abstract port for the client-local key-value store holding the cart.

Defined in the domain layer so the cart never depends on where it is
persisted (a browser-style local store, a file, memory in tests).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CartStorage(ABC):

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the raw value stored under *key*, or None if absent.

        Raises PersistenceError if the store cannot be read.
        """

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Overwrite *key* with *value*.

        Raises PersistenceError if the store cannot be written.
        """
