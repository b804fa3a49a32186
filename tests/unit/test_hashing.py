"""Unit tests for hashing module."""

import pytest

from securelink.hashing import (
    HASHERS,
    HashlibHasher,
    Md5Hasher,
    Sha1Hasher,
    Sha256Hasher,
    get_hasher,
)


class TestHashers:
    """Tests for the concrete digest bindings."""

    @pytest.mark.parametrize(
        "hasher,expected",
        [
            (Md5Hasher(), "5d41402abc4b2a76b9719d911017c592"),
            (Sha1Hasher(), "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"),
            (Sha256Hasher(), "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"),
        ],
    )
    def test_known_digests(self, hasher, expected):
        """Each binding produces the standard lowercase hex digest."""
        assert hasher.hash("hello") == expected

    def test_bytes_and_str_agree(self):
        """Strings are hashed as their UTF-8 bytes."""
        hasher = Md5Hasher()

        assert hasher.hash("héllo") == hasher.hash("héllo".encode("utf-8"))
        assert hasher.hash("héllo") == "be50e8478cf24ff3595bc7307fb91b50"

    def test_is_valid_match(self):
        """is_valid accepts the digest of the same data."""
        hasher = Sha256Hasher()
        assert hasher.is_valid(hasher.hash("data"), "data") is True

    def test_is_valid_mismatch(self):
        """is_valid rejects a digest of different data."""
        hasher = Sha256Hasher()

        assert hasher.is_valid(hasher.hash("data"), "other") is False
        assert hasher.is_valid("", "data") is False

    def test_is_valid_is_case_sensitive(self):
        """Uppercase hex is not the digest the hasher writes."""
        hasher = Md5Hasher()
        assert hasher.is_valid(hasher.hash("hello").upper(), "hello") is False

    def test_generic_algorithm(self):
        """HashlibHasher accepts any hashlib algorithm name."""
        assert HashlibHasher("sha1").hash("hello") == Sha1Hasher().hash("hello")

    def test_unknown_algorithm(self):
        """Unknown algorithms fail at construction."""
        with pytest.raises(ValueError):
            HashlibHasher("not-a-hash")

    def test_missing_algorithm(self):
        """The base class needs an algorithm."""
        with pytest.raises(ValueError, match="required"):
            HashlibHasher()


class TestGetHasher:
    """Tests for get_hasher function."""

    def test_registry_names(self):
        """The registry exposes the three bindings."""
        assert set(HASHERS) == {"md5", "sha1", "sha256"}

    def test_lookup_case_insensitive(self):
        """Lookup ignores case and surrounding whitespace."""
        assert isinstance(get_hasher("MD5"), Md5Hasher)
        assert isinstance(get_hasher(" sha256 "), Sha256Hasher)

    def test_unsupported(self):
        """Unsupported names list the supported ones."""
        with pytest.raises(ValueError, match="md5, sha1, sha256"):
            get_hasher("crc32")
