"""RSA encryption of secrets under a selectable padding scheme."""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from apictl.errors import EncryptionFailure
from apictl.models import OAEP_ALGORITHM, PKCS1_ALGORITHM


class PaddingScheme(ABC):
    """One way of padding a plaintext block before RSA encryption."""

    algorithm: str

    @abstractmethod
    def padding(self) -> padding.AsymmetricPadding: ...

    @abstractmethod
    def max_plaintext_size(self, key: RSAPublicKey) -> int: ...

    def encrypt(self, key: RSAPublicKey, plaintext: str) -> str:
        """Encrypt a single block and return base64 ciphertext.

        Raises:
            EncryptionFailure: if the plaintext does not fit in one block
        """
        data = plaintext.encode()
        limit = self.max_plaintext_size(key)
        if len(data) > limit:
            raise EncryptionFailure(
                f"Plaintext is {len(data)} bytes; {self.algorithm} with a "
                f"{key.key_size}-bit key can encrypt at most {limit} bytes"
            )
        try:
            ciphertext = key.encrypt(data, self.padding())
        except ValueError as e:
            raise EncryptionFailure(f"Encryption failed: {e}") from e
        return base64.b64encode(ciphertext).decode()


class PKCS1v15Scheme(PaddingScheme):
    algorithm = PKCS1_ALGORITHM

    def padding(self) -> padding.AsymmetricPadding:
        return padding.PKCS1v15()

    def max_plaintext_size(self, key: RSAPublicKey) -> int:
        return key.key_size // 8 - 11


class OAEPScheme(PaddingScheme):
    """OAEP with SHA-1 for both the digest and MGF1, no label."""

    algorithm = OAEP_ALGORITHM

    def padding(self) -> padding.AsymmetricPadding:
        return padding.OAEP(
            mgf=padding.MGF1(algorithm=hashes.SHA1()),
            algorithm=hashes.SHA1(),
            label=None,
        )

    def max_plaintext_size(self, key: RSAPublicKey) -> int:
        return key.key_size // 8 - 2 * hashes.SHA1.digest_size - 2


def is_pkcs1_encryption(algorithm: str) -> bool:
    return algorithm.lower() == PKCS1_ALGORITHM.lower()


def is_oaep_encryption(algorithm: str) -> bool:
    return algorithm.lower() == OAEP_ALGORITHM.lower()


def select_scheme(algorithm: str | None) -> PaddingScheme:
    """Pick a padding scheme by label; anything unrecognised means OAEP."""
    if algorithm and is_pkcs1_encryption(algorithm):
        return PKCS1v15Scheme()
    return OAEPScheme()


def encrypt_all(
    key: RSAPublicKey, secrets: dict[str, str], scheme: PaddingScheme
) -> dict[str, str]:
    """Encrypt every value of an alias -> plaintext mapping."""
    return {alias: scheme.encrypt(key, plaintext) for alias, plaintext in secrets.items()}
