"""Digest capability used to produce and verify link signatures."""

import hashlib
import hmac
from typing import Protocol, Union


class Hasher(Protocol):
    """Deterministic digest of a string, rendered as lowercase hex."""

    def hash(self, data: Union[str, bytes]) -> str: ...

    def is_valid(self, claimed: str, data: Union[str, bytes]) -> bool: ...


class HashlibHasher:
    """Hasher backed by a ``hashlib`` algorithm.

    Parameters
    ----------
    algorithm : str
        Any name accepted by ``hashlib.new`` (e.g. "md5", "sha256").
    """

    algorithm: str = ""

    def __init__(self, algorithm: str | None = None):
        if algorithm is not None:
            self.algorithm = algorithm
        if not self.algorithm:
            raise ValueError("Hash algorithm is required")
        # Fail at construction rather than on first use
        hashlib.new(self.algorithm)

    def hash(self, data: Union[str, bytes]) -> str:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return hashlib.new(self.algorithm, data).hexdigest()

    def is_valid(self, claimed: str, data: Union[str, bytes]) -> bool:
        """Recompute the digest of ``data`` and compare it to ``claimed``.

        The comparison is constant-time.
        """
        return hmac.compare_digest(claimed.encode("utf-8"), self.hash(data).encode("utf-8"))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Md5Hasher(HashlibHasher):
    """MD5 digest. Fast, kept for links issued by older deployments."""

    algorithm = "md5"


class Sha1Hasher(HashlibHasher):
    algorithm = "sha1"


class Sha256Hasher(HashlibHasher):
    algorithm = "sha256"


HASHERS: dict[str, type[HashlibHasher]] = {
    "md5": Md5Hasher,
    "sha1": Sha1Hasher,
    "sha256": Sha256Hasher,
}


def get_hasher(name: str) -> HashlibHasher:
    """Instantiate a hasher by its algorithm name.

    Args:
        name: Algorithm name, case-insensitive ("md5", "sha1", "sha256")

    Raises:
        ValueError: If the name is not a supported algorithm
    """
    try:
        return HASHERS[name.strip().lower()]()
    except KeyError:
        supported = ", ".join(sorted(HASHERS))
        raise ValueError(f"Unsupported hash algorithm '{name}' (supported: {supported})") from None
