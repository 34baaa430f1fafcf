"""Synthetic identifiers, fingerprints and key material."""

from __future__ import annotations

import base64
import hashlib
import itertools
import random
import re

FINGERPRINT_PATTERN = re.compile(r"^[0-9a-f]{2}(?::[0-9a-f]{2}){15}$")
INSTANCE_ID_PATTERN = re.compile(r"^i-[0-9a-f]{12}$")
KEY_TYPE = "ssh-ed25519"


class IdGenerator:
    """Session-unique ids built from a seedable random source and a counter.

    Nothing here is cryptographically meaningful; a fixed ``seed`` replays the
    exact same sequence.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)
        self._counter = itertools.count(1)

    def _digest(self, seed: str) -> bytes:
        salt = self._random.getrandbits(64)
        material = f"{seed}:{next(self._counter)}:{salt:016x}"
        return hashlib.sha256(material.encode("utf-8")).digest()

    def new_instance_id(self) -> str:
        return "i-" + self._digest("instance").hex()[:12]

    def new_fingerprint(self, seed: str) -> str:
        return ":".join(f"{octet:02x}" for octet in self._digest(seed)[:16])

    def new_public_key(self, name: str, *, hostname: str) -> str:
        # length-prefixed 32-byte key body following the encoded type header
        blob = b"\x00\x00\x00\x20" + self._digest(name)
        payload = base64.b64encode(blob).decode("ascii")
        return f"{KEY_TYPE} AAAAC3NzaC1lZDI1NTE5{payload} {name}@{hostname}"

    def latency_ms(self, low: float = 8.0, high: float = 48.0) -> float:
        return round(self._random.uniform(low, high), 3)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


def simulated_address(host: str, *, private: bool = True) -> str:
    """Stable fake IPv4 address for ``host``; independent of the session seed."""
    digest = hashlib.sha256(host.encode("utf-8")).digest()
    if private:
        return f"10.{digest[0]}.{digest[1]}.{digest[2] % 253 + 1}"
    return f"{digest[0] % 223 + 1}.{digest[1]}.{digest[2]}.{digest[3] % 253 + 1}"
