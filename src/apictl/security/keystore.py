"""Keystore loading and RSA key extraction.

PKCS#12 keystores are read with ``cryptography``. Java JKS/JCEKS keystores
are read with ``pyjks`` (the ``jks`` extra); their private key entries hold
PKCS#8 DER which is then parsed with ``cryptography``.

Only the public half of the key ever leaves this module through
``load_encryption_key``.
"""

from __future__ import annotations

import base64
import binascii
from abc import ABC, abstractmethod
from pathlib import Path

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from cryptography.hazmat.primitives.serialization import load_der_private_key, pkcs12

from apictl.errors import KeyStoreError, KeyStoreErrorKind
from apictl.models import KeyStoreConfig
from apictl.security import properties

# keystore-info.properties keys
LOCATION_KEY = "secret.keystore.location"
PASSWORD_KEY = "secret.keystore.password"
KEY_ALIAS_KEY = "secret.keystore.key.alias"
KEY_PASSWORD_KEY = "secret.keystore.key.password"

JKS_MAGIC = b"\xfe\xed\xfe\xed"
JCEKS_MAGIC = b"\xce\xce\xce\xce"


class KeyStore(ABC):
    """An opened, password-verified keystore."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @abstractmethod
    def aliases(self) -> list[str]:
        """Aliases of private key entries, lower-cased."""

    @abstractmethod
    def get_private_key(self, alias: str, key_password: str) -> RSAPrivateKey:
        """Extract the RSA private key stored under an alias."""

    def _no_such_alias(self, alias: str) -> KeyStoreError:
        return KeyStoreError(
            f"Reading Key Entry: no private key entry '{alias}' in {self.path}",
            kind=KeyStoreErrorKind.NO_SUCH_ALIAS,
        )


def _require_rsa(key: object, alias: str) -> RSAPrivateKey:
    if not isinstance(key, RSAPrivateKey):
        raise KeyStoreError(
            f"Parsing Key Entry: key '{alias}' is {type(key).__name__}, not an RSA key",
            kind=KeyStoreErrorKind.UNSUPPORTED_KEY,
        )
    return key


class PKCS12KeyStore(KeyStore):
    """PKCS#12 container.

    PKCS#12 protects the key with the store password, so a different key
    password is rejected, matching what keytool allows.
    """

    def __init__(self, path: Path, store_password: str, bundle) -> None:
        super().__init__(path)
        self._store_password = store_password
        self._bundle = bundle

    def _friendly_name(self) -> str | None:
        cert = self._bundle.cert
        if cert is None or cert.friendly_name is None:
            return None
        return cert.friendly_name.decode("utf-8", errors="replace").lower()

    def aliases(self) -> list[str]:
        if self._bundle.key is None:
            return []
        name = self._friendly_name()
        return [name] if name else []

    def get_private_key(self, alias: str, key_password: str) -> RSAPrivateKey:
        if self._bundle.key is None:
            raise self._no_such_alias(alias)

        name = self._friendly_name()
        if name is not None and name != alias.lower():
            raise self._no_such_alias(alias)

        if key_password and key_password != self._store_password:
            raise KeyStoreError(
                f"Reading Key Entry: wrong password for key '{alias}'",
                kind=KeyStoreErrorKind.BAD_KEY_PASSWORD,
            )

        return _require_rsa(self._bundle.key, alias)


class JavaKeyStore(KeyStore):
    """JKS or JCEKS container."""

    def __init__(self, path: Path, keystore) -> None:
        super().__init__(path)
        self._keystore = keystore

    def aliases(self) -> list[str]:
        return [alias.lower() for alias in self._keystore.private_keys]

    def get_private_key(self, alias: str, key_password: str) -> RSAPrivateKey:
        import jks

        entry = None
        for name, candidate in self._keystore.private_keys.items():
            if name.lower() == alias.lower():
                entry = candidate
                break
        if entry is None:
            raise self._no_such_alias(alias)

        if not entry.is_decrypted():
            try:
                entry.decrypt(key_password)
            except jks.util.DecryptionFailureException as e:
                raise KeyStoreError(
                    f"Reading Key Entry: wrong password for key '{alias}'",
                    kind=KeyStoreErrorKind.BAD_KEY_PASSWORD,
                ) from e

        try:
            key = load_der_private_key(entry.pkey_pkcs8, password=None)
        except (ValueError, TypeError) as e:
            raise KeyStoreError(
                f"Parsing Key Entry: {e}",
                kind=KeyStoreErrorKind.UNSUPPORTED_KEY,
            ) from e

        return _require_rsa(key, alias)


def _load_pkcs12(path: Path, data: bytes, store_password: str) -> KeyStore:
    if not data.startswith(b"\x30"):
        raise KeyStoreError(
            f"Reading Key Store: {path} is not a recognised keystore",
            kind=KeyStoreErrorKind.CORRUPT,
        )
    try:
        bundle = pkcs12.load_pkcs12(data, store_password.encode() or None)
    except ValueError as e:
        raise KeyStoreError(
            f"Reading Key Store: invalid password or corrupt keystore {path}",
            kind=KeyStoreErrorKind.BAD_PASSWORD,
        ) from e
    return PKCS12KeyStore(path, store_password, bundle)


def _load_java_keystore(path: Path, data: bytes, store_password: str) -> KeyStore:
    try:
        import jks
    except ImportError as e:
        raise KeyStoreError(
            f"Reading Key Store: {path} is a Java keystore",
            kind=KeyStoreErrorKind.CORRUPT,
            remediation="Install JKS support with: [cyan]pip install 'apictl[jks]'[/cyan]",
        ) from e

    try:
        keystore = jks.KeyStore.loads(data, store_password, try_decrypt_keys=False)
    except jks.util.KeystoreSignatureException as e:
        raise KeyStoreError(
            f"Reading Key Store: invalid password for {path}",
            kind=KeyStoreErrorKind.BAD_PASSWORD,
        ) from e
    except jks.util.KeystoreException as e:
        raise KeyStoreError(
            f"Reading Key Store: {e}",
            kind=KeyStoreErrorKind.CORRUPT,
        ) from e
    return JavaKeyStore(path, keystore)


def load_keystore(path: Path | str, store_password: str) -> KeyStore:
    """Open a keystore file and verify its password.

    Raises:
        KeyStoreError: NOT_FOUND, CORRUPT or BAD_PASSWORD
    """
    path = Path(path).expanduser()
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise KeyStoreError(
            f"Reading Key Store: {path} does not exist",
            kind=KeyStoreErrorKind.NOT_FOUND,
        ) from e
    except OSError as e:
        raise KeyStoreError(
            f"Reading Key Store: cannot read {path}: {e.strerror}",
            kind=KeyStoreErrorKind.CORRUPT,
        ) from e

    if data[:4] in (JKS_MAGIC, JCEKS_MAGIC):
        return _load_java_keystore(path, data, store_password)
    return _load_pkcs12(path, data, store_password)


def read_keystore_config(path: Path) -> KeyStoreConfig:
    """Read keystore-info.properties, decoding the base64 passwords.

    Raises:
        KeyStoreError: if the file is missing or incomplete
    """
    if not path.exists():
        raise KeyStoreError(
            f"Keystore details not found at {path}",
            kind=KeyStoreErrorKind.NOT_FOUND,
            remediation="Run '[cyan]apictl secret init[/cyan]' first.",
        )

    try:
        props = properties.load(path)
    except (OSError, ValueError) as e:
        raise KeyStoreError(
            f"Cannot read keystore details from {path}: {e}",
            kind=KeyStoreErrorKind.CORRUPT,
            remediation="Run '[cyan]apictl secret init[/cyan]' to recreate it.",
        ) from e
    missing = [
        key
        for key in (LOCATION_KEY, PASSWORD_KEY, KEY_ALIAS_KEY, KEY_PASSWORD_KEY)
        if key not in props
    ]
    if missing:
        raise KeyStoreError(
            f"Missing {', '.join(missing)} in {path}",
            kind=KeyStoreErrorKind.CORRUPT,
            remediation="Run '[cyan]apictl secret init[/cyan]' to recreate it.",
        )

    try:
        password = base64.b64decode(props[PASSWORD_KEY], validate=True).decode()
        key_password = base64.b64decode(props[KEY_PASSWORD_KEY], validate=True).decode()
    except (binascii.Error, UnicodeDecodeError) as e:
        raise KeyStoreError(
            f"Keystore passwords in {path} are not valid base64",
            kind=KeyStoreErrorKind.CORRUPT,
        ) from e

    return KeyStoreConfig(
        location=props[LOCATION_KEY],
        password=password,
        key_alias=props[KEY_ALIAS_KEY],
        key_password=key_password,
    )


def write_keystore_config(config: KeyStoreConfig, path: Path) -> None:
    """Write keystore-info.properties with base64 encoded passwords."""
    properties.dump(
        {
            LOCATION_KEY: config.location,
            PASSWORD_KEY: base64.b64encode(config.password.encode()).decode(),
            KEY_ALIAS_KEY: config.key_alias,
            KEY_PASSWORD_KEY: base64.b64encode(config.key_password.encode()).decode(),
        },
        path,
    )


def load_encryption_key(config: KeyStoreConfig) -> RSAPublicKey:
    """Open the configured keystore and return the public key to encrypt with."""
    keystore = load_keystore(config.location, config.password)
    private_key = keystore.get_private_key(config.key_alias, config.key_password)
    return private_key.public_key()
