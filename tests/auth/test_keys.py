"""Tests for credential encoding and client secret encryption."""

import base64

import pytest

from apictl.auth.keys import (
    IV_SIZE,
    decrypt_client_secret,
    encrypt_client_secret,
    get_base64_encoded_credentials,
    password_key,
)
from apictl.errors import ApictlError


class TestBase64Credentials:
    def test_encodes_key_and_secret(self):
        assert get_base64_encoded_credentials("admin", "admin") == "YWRtaW46YWRtaW4="

    def test_secret_may_contain_colon(self):
        encoded = get_base64_encoded_credentials("id", "a:b")
        assert base64.b64decode(encoded) == b"id:a:b"


class TestPasswordKey:
    def test_key_is_hex_md5(self):
        """The key is the 32 character hex MD5 of the password."""
        key = password_key("admin")
        assert key == b"21232f297a57a5a743894a0e4a801fc3"
        assert len(key) == 32


class TestClientSecretEncryption:
    """Tests for encrypt/decrypt of cached client secrets."""

    def test_round_trip_with_same_password(self):
        encrypted = encrypt_client_secret("admin", "my-client-secret")
        assert decrypt_client_secret("admin", encrypted) == "my-client-secret"

    def test_ciphertext_is_not_plaintext(self):
        encrypted = encrypt_client_secret("admin", "my-client-secret")
        assert "my-client-secret" not in encrypted
        assert b"my-client-secret" not in base64.urlsafe_b64decode(encrypted)

    def test_random_iv_makes_ciphertexts_differ(self):
        first = encrypt_client_secret("admin", "my-client-secret")
        second = encrypt_client_secret("admin", "my-client-secret")
        assert first != second

    def test_iv_is_prefixed(self):
        encrypted = encrypt_client_secret("admin", "abc")
        assert len(base64.urlsafe_b64decode(encrypted)) == IV_SIZE + 3

    def test_wrong_password_yields_garbage_not_error(self):
        """There is no integrity check; a wrong password decrypts to garbage."""
        encrypted = encrypt_client_secret("admin", "my-client-secret")

        result = decrypt_client_secret("not-admin", encrypted)

        assert result != "my-client-secret"

    def test_malformed_ciphertext_raises(self):
        with pytest.raises(ApictlError):
            decrypt_client_secret("admin", "c2hvcnQ=")
