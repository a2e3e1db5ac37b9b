"""Tests for identifier hashing."""
import pytest

from mindbridge.shared.utils import pii
from mindbridge.shared.utils.pii import (
    configure_pii_salt,
    hash_pii,
    hash_text_for_audit,
)

SALT = "test_salt_that_is_at_least_32_characters_long"


@pytest.fixture(autouse=True)
def reset_salt(monkeypatch):
    monkeypatch.setattr(pii, "_PII_SALT", None)


class TestConfigurePiiSalt:

    @pytest.mark.parametrize("salt", ["", "short", "x" * 31])
    def test_short_salt_rejected(self, salt):
        with pytest.raises(ValueError):
            configure_pii_salt(salt)

    def test_minimum_length_accepted(self):
        configure_pii_salt("x" * 32)

        assert pii._PII_SALT == "x" * 32


class TestHashPii:

    def test_unconfigured_salt_raises(self):
        with pytest.raises(RuntimeError):
            hash_pii("user_123")

    def test_hash_is_stable_and_hides_value(self):
        configure_pii_salt(SALT)

        digest = hash_pii("user_123")

        assert digest == hash_pii("user_123")
        assert "user_123" not in digest
        assert len(digest) == 64

    def test_salt_changes_hash(self):
        configure_pii_salt(SALT)
        first = hash_pii("user_123")
        configure_pii_salt(SALT + "_rotated")

        assert hash_pii("user_123") != first


class TestHashTextForAudit:

    def test_does_not_need_salt(self):
        assert len(hash_text_for_audit("I feel anxious")) == 64

    def test_none_hashes_like_empty(self):
        assert hash_text_for_audit(None) == hash_text_for_audit("")
