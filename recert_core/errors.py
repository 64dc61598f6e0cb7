from __future__ import annotations
from typing import Any, Optional


class RecertError(Exception):
    pass


class KeyDerivationError(RecertError):
    pass


class PoolExhaustedError(RecertError):
    def __init__(self, bits: int, message: str = "RSA pool empty"):
        super().__init__(f"{message} (requested {bits} bits)")
        self.bits = bits


class CascadeError(RecertError):
    """A dependent (signee or associated public key) failed to regenerate.

    ``signee_index`` is None when the failure came from the public key.
    """

    def __init__(self, message: str, signee_index: Optional[int] = None):
        super().__init__(message)
        self.signee_index = signee_index


class SigneeError(RecertError):
    pass


class PemError(RecertError):
    pass


class StoreError(RecertError):
    pass


class CommitError(RecertError):
    def __init__(self, message: str, location: Any = None):
        if location is not None:
            message = f"{message} [location: {location}]"
        super().__init__(message)
        self.location = location


class ShapeMismatchError(CommitError):
    pass
