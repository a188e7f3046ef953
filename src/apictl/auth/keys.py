"""Credential encoding and password-keyed encryption of cached client secrets.

Cached client secrets are encrypted with AES in CFB mode. The key is the hex
MD5 digest of the account password (32 ASCII bytes, so AES-256); a random IV
is prepended to the ciphertext and the result is URL-safe base64 encoded.

There is no integrity check: decrypting with the wrong password returns
garbage instead of failing, and the mistake only surfaces when the
authorization server rejects the resulting token request.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import os

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from apictl.errors import ApictlError

IV_SIZE = 16


def get_base64_encoded_credentials(key: str, secret: str) -> str:
    """Return base64("key:secret")."""
    return base64.b64encode(f"{key}:{secret}".encode()).decode()


def password_key(password: str) -> bytes:
    """Derive the symmetric key for a password."""
    return hashlib.md5(password.encode()).hexdigest().encode()


def encrypt_client_secret(password: str, client_secret: str) -> str:
    iv = os.urandom(IV_SIZE)
    encryptor = Cipher(algorithms.AES(password_key(password)), modes.CFB(iv)).encryptor()
    ciphertext = encryptor.update(client_secret.encode()) + encryptor.finalize()
    return base64.urlsafe_b64encode(iv + ciphertext).decode()


def decrypt_client_secret(password: str, encrypted: str) -> str:
    """Decrypt a cached client secret with a freshly supplied password."""
    try:
        data = base64.urlsafe_b64decode(encrypted.encode())
    except (binascii.Error, ValueError) as e:
        raise ApictlError(
            "Cached client secret is not valid base64",
            remediation="Reset the cached credentials for this environment.",
        ) from e

    if len(data) < IV_SIZE:
        raise ApictlError(
            "Cached client secret is too short",
            remediation="Reset the cached credentials for this environment.",
        )

    iv, ciphertext = data[:IV_SIZE], data[IV_SIZE:]
    decryptor = Cipher(algorithms.AES(password_key(password)), modes.CFB(iv)).decryptor()
    plaintext = decryptor.update(ciphertext) + decryptor.finalize()
    return plaintext.decode("utf-8", errors="replace")
