"""Abstract interface (port) for reversible single-field encryption."""

from abc import ABC, abstractmethod


class FieldCipher(ABC):
    """Port for protecting one text attribute at rest."""

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        """Return an opaque, self-contained encoding of ``plaintext``."""
        ...

    @abstractmethod
    def decrypt(self, encoded: str) -> str:
        """Reverse :meth:`encrypt`. Must not raise; returns input on failure."""
        ...
