# securelink: signed, optionally expiring links

from loguru import logger

from .clock import Clock, FixedClock, SystemClock, unix_seconds
from .hashing import HASHERS, Hasher, HashlibHasher, Md5Hasher, Sha1Hasher, Sha256Hasher, get_hasher
from .signer import (
    InvalidSignatureError,
    LinkExpiredError,
    SecureLink,
    SecureLinkError,
    ValidationStatus,
    canonicalize,
)
from .url import URL

# Silent unless the host application calls logger.enable("securelink")
logger.disable("securelink")

__all__ = [
    "URL",
    "Clock",
    "FixedClock",
    "SystemClock",
    "unix_seconds",
    "HASHERS",
    "Hasher",
    "HashlibHasher",
    "Md5Hasher",
    "Sha1Hasher",
    "Sha256Hasher",
    "get_hasher",
    "InvalidSignatureError",
    "LinkExpiredError",
    "SecureLink",
    "SecureLinkError",
    "ValidationStatus",
    "canonicalize",
]
