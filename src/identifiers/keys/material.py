from __future__ import annotations

import base64
from contextlib import contextmanager


def _zero(buf: bytearray) -> None:
    for i in range(len(buf)):
        buf[i] = 0


class PrivateKeyMaterial:
    """
    PKCS#8 DER private key held in a mutable buffer so it can be zeroed in place.
    Once wiped the buffer is empty and any further read fails.

    The clear is best-effort. Callers that need the DER use ``borrowed()``, which
    hands out a scratch bytearray zeroed on exit. ``der()`` and ``to_b64()`` return
    immutable copies that stay in memory until collected, and so do the bytes the
    key library produced when the key was generated or loaded.
    """

    __slots__ = ("_buf", "_wiped")

    def __init__(self, der: bytes | bytearray):
        self._buf = bytearray(der)
        self._wiped = False

    @classmethod
    def from_b64(cls, value: str) -> "PrivateKeyMaterial":
        return cls(base64.b64decode(value))

    @property
    def wiped(self) -> bool:
        return self._wiped

    def _ensure_present(self) -> None:
        if self._wiped:
            raise ValueError("Private key material has been erased")

    @contextmanager
    def borrowed(self):
        self._ensure_present()
        scratch = bytearray(self._buf)
        try:
            yield scratch
        finally:
            _zero(scratch)

    def der(self) -> bytes:
        self._ensure_present()
        return bytes(self._buf)

    def to_b64(self) -> str:
        self._ensure_present()
        return base64.b64encode(self._buf).decode("ascii")

    def wipe(self) -> None:
        _zero(self._buf)
        del self._buf[:]
        self._wiped = True

    def __len__(self) -> int:
        return len(self._buf)

    def __repr__(self) -> str:
        state = "wiped" if self._wiped else f"{len(self._buf)} bytes"
        return f"<PrivateKeyMaterial {state}>"
