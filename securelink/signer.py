"""Signing and validation of links carrying a signature in their query string."""

import re
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union

from loguru import logger

from .clock import Clock, SystemClock, unix_seconds
from .hashing import Hasher
from .url import URL

DEFAULT_SIGNATURE_PARAM = "signature"
DEFAULT_EXPIRATION_PARAM = "expires"

# Optional sign, digits with an optional fraction, optional exponent
_EXPIRATION_PATTERN = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$", re.ASCII)


class SecureLinkError(Exception):
    """Base class for link validation failures."""

    reason = "invalid link"

    def __init__(self, path: str = ""):
        self.path = path
        super().__init__(f"{self.reason}: {path}" if path else self.reason)


class InvalidSignatureError(SecureLinkError):
    """Raised when the signature is missing or does not match the link."""

    reason = "invalid signature"


class LinkExpiredError(SecureLinkError):
    """Raised when the expiration is malformed or in the past."""

    reason = "link has expired"


class ValidationStatus(Enum):
    """Outcome of checking a link."""

    VALID = "valid"
    INVALID_SIGNATURE = "invalid_signature"
    LINK_EXPIRED = "link_expired"

    @property
    def error(self) -> Optional[type[SecureLinkError]]:
        """Exception class raised by ``validate`` for this outcome."""
        return _STATUS_ERRORS.get(self)


_STATUS_ERRORS = {
    ValidationStatus.INVALID_SIGNATURE: InvalidSignatureError,
    ValidationStatus.LINK_EXPIRED: LinkExpiredError,
}


def canonicalize(url: URL, signature_param: str, secret: str) -> str:
    """Build the string that gets hashed for ``url``.

    The result is the path, then ``?`` and the query string with every
    ``signature_param`` occurrence removed, then a space and the secret. The
    ``?`` is left out when nothing remains of the query string.

    Parameters
    ----------
    url : URL
        Link to reduce.
    signature_param : str
        Name of the parameter holding the signature.
    secret : str
        Shared secret appended after the space.

    Returns
    -------
    str
        The canonical signing string.
    """
    query = url.query_without(signature_param)
    if query:
        return f"{url.path}?{query} {secret}"
    return f"{url.path} {secret}"


def _parse_expiration(value: str) -> Optional[float]:
    """Read a plain decimal number, or None for anything else.

    Spellings ``float`` would also take ("inf", "1_000", "nan") are refused.
    """
    if not _EXPIRATION_PATTERN.match(value):
        return None
    return float(value)


class SecureLink:
    """Signs links and validates links signed with the same configuration.

    The instance holds no per-call state and can be shared between threads.

    Args:
        secret: Shared secret, identical on the signing and validating side
        hasher: Digest capability producing and verifying signatures
        signature_param: Query parameter that carries the signature
        expiration_param: Query parameter that carries the expiration
        clock: Time source for expiration checks (defaults to the system clock)
        default_ttl: Lifetime in seconds applied by ``sign_url`` when no
            expiration is given (None signs non-expiring links)
    """

    def __init__(
        self,
        secret: str,
        hasher: Hasher,
        signature_param: str = DEFAULT_SIGNATURE_PARAM,
        expiration_param: str = DEFAULT_EXPIRATION_PARAM,
        clock: Optional[Clock] = None,
        default_ttl: Optional[int] = None,
    ):
        if not secret:
            raise ValueError("Secret cannot be empty")
        if not signature_param or not expiration_param:
            raise ValueError("Signature and expiration parameter names cannot be empty")
        if signature_param == expiration_param:
            raise ValueError(
                f"Signature and expiration parameters must differ, both are '{signature_param}'"
            )
        self._secret = secret
        self.hasher = hasher
        self.signature_param = signature_param
        self.expiration_param = expiration_param
        self.clock = clock or SystemClock()
        self.default_ttl = default_ttl

    def __repr__(self) -> str:
        return (
            f"SecureLink(hasher={self.hasher!r}, signature_param={self.signature_param!r}, "
            f"expiration_param={self.expiration_param!r}, clock={self.clock!r})"
        )

    def sign(self, url: URL, expires_at: Union[int, datetime, None] = None) -> None:
        """Add the signature (and the expiration, if given) to ``url`` in place.

        Any existing signature is replaced, and so is an existing expiration
        when a new one is given, so signing twice leaves one of each. An
        expiration of None or a non-positive value keeps whatever expiration
        the URL already carries.
        """
        if isinstance(expires_at, datetime):
            expires_at = unix_seconds(expires_at)
        if expires_at is not None:
            expires_at = int(expires_at)
        if expires_at is not None and expires_at > 0:
            url.set(self.expiration_param, expires_at)

        signature = self.hasher.hash(self._data_to_sign(url))
        url.set(self.signature_param, signature)
        logger.debug(f"Signed link {url.path} (expires: {url.get(self.expiration_param) or 'never'})")

    def sign_url(
        self,
        url: str,
        expires_at: Union[int, datetime, None] = None,
        *,
        expires_in: Optional[int] = None,
    ) -> str:
        """Sign a URL string and return the signed string.

        Parameters
        ----------
        url : str
            The URL to sign.
        expires_at : int | datetime | None
            Absolute expiration, as unix seconds or a datetime.
        expires_in : Optional[int]
            Seconds from now until the link expires. Cannot be combined with
            ``expires_at``. Defaults to ``default_ttl`` when neither is given.

        Returns
        -------
        str
            The signed URL.
        """
        if expires_in is not None and expires_at is not None:
            raise ValueError("Pass either expires_at or expires_in, not both")
        if expires_at is None:
            expires_in = expires_in if expires_in is not None else self.default_ttl
            if expires_in is not None:
                expires_at = self.clock.now() + timedelta(seconds=expires_in)
        parsed = URL(url)
        self.sign(parsed, expires_at)
        return str(parsed)

    def check(self, url: Union[URL, str]) -> ValidationStatus:
        """Run the validation procedure and report the outcome without raising."""
        if isinstance(url, str):
            url = URL(url)

        signature = url.get(self.signature_param)
        if not signature:
            return self._reject(url, ValidationStatus.INVALID_SIGNATURE, "missing signature")
        if not self.hasher.is_valid(signature, self._data_to_sign(url)):
            return self._reject(url, ValidationStatus.INVALID_SIGNATURE, "signature mismatch")

        if not url.has(self.expiration_param):
            return ValidationStatus.VALID
        expires = _parse_expiration(url.get(self.expiration_param) or "")
        if expires is None:
            return self._reject(url, ValidationStatus.LINK_EXPIRED, "malformed expiration")
        if expires < unix_seconds(self.clock.now()):
            return self._reject(url, ValidationStatus.LINK_EXPIRED, "expired")
        return ValidationStatus.VALID

    def validate(self, url: Union[URL, str]) -> None:
        """Validate ``url``, raising on failure.

        Raises
        ------
        InvalidSignatureError
            The signature is missing, empty or does not match.
        LinkExpiredError
            The expiration is not a number or lies in the past.
        """
        if isinstance(url, str):
            url = URL(url)
        error = self.check(url).error
        if error is not None:
            raise error(url.path)

    def is_valid(self, url: Union[URL, str]) -> bool:
        try:
            self.validate(url)
        except SecureLinkError:
            return False
        return True

    def _data_to_sign(self, url: URL) -> str:
        return canonicalize(url, self.signature_param, self._secret)

    def _reject(self, url: URL, status: ValidationStatus, detail: str) -> ValidationStatus:
        logger.debug(f"Rejected link {url.path}: {detail}")
        return status
