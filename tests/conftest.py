"""Pytest configuration and shared fixtures for apictl tests."""

from __future__ import annotations

import datetime
from io import StringIO
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    pkcs12,
)
from cryptography.x509.oid import NameOID
from rich.console import Console

from apictl.config.settings import Config, EnvironmentConfig
from apictl.core.context import CommandContext
from apictl.models import EnvironmentCredentialRecord, KeyStoreConfig
from apictl.security.keystore import write_keystore_config

STORE_PASSWORD = "wso2carbon"
KEY_ALIAS = "wso2carbon"


def _self_signed_cert(private_key) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "localhost")])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=365))
        .sign(private_key, hashes.SHA256())
    )


def write_pkcs12(path: Path, private_key, alias: str, password: str) -> Path:
    """Write a single-entry PKCS#12 keystore."""
    data = pkcs12.serialize_key_and_certificates(
        name=alias.encode(),
        key=private_key,
        cert=_self_signed_cert(private_key),
        cas=None,
        encryption_algorithm=BestAvailableEncryption(password.encode()),
    )
    path.write_bytes(data)
    return path


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """2048-bit RSA key shared by the whole session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def make_pkcs12():
    """Factory writing a single-entry PKCS#12 keystore."""
    return write_pkcs12


@pytest.fixture
def pkcs12_keystore(tmp_path: Path, rsa_private_key) -> Path:
    """PKCS#12 keystore holding the session RSA key."""
    return write_pkcs12(
        tmp_path / "wso2carbon.p12", rsa_private_key, KEY_ALIAS, STORE_PASSWORD
    )


@pytest.fixture
def keystore_config(pkcs12_keystore: Path) -> KeyStoreConfig:
    return KeyStoreConfig(
        location=str(pkcs12_keystore),
        password=STORE_PASSWORD,
        key_alias=KEY_ALIAS,
        key_password=STORE_PASSWORD,
    )


@pytest.fixture
def keystore_properties(tmp_path: Path, keystore_config: KeyStoreConfig) -> Path:
    """keystore-info.properties pointing at the PKCS#12 keystore."""
    path = tmp_path / "mi-security" / "keystore-info.properties"
    write_keystore_config(keystore_config, path)
    return path


@pytest.fixture
def sample_config() -> Config:
    """Config with a single 'dev' environment."""
    return Config(
        environments={
            "dev": EnvironmentConfig(
                api_manager_endpoint="https://localhost:9443",
                registration_endpoint="https://localhost:9443/client-registration/v0.17/register",
                token_endpoint="https://localhost:8243/token",
            ),
        }
    )


@pytest.fixture
def command_ctx(tmp_path: Path, sample_config: Config) -> CommandContext:
    """Context writing to tmp_path with captured console output."""
    working_dir = tmp_path / "work"
    working_dir.mkdir(exist_ok=True)
    return CommandContext(
        working_dir=working_dir,
        config=sample_config,
        config_path=tmp_path / "config.toml",
        env_keys_path=tmp_path / "env_keys.json",
        console=Console(file=StringIO(), width=200),
        verbose=True,
    )


@pytest.fixture
def cached_record() -> EnvironmentCredentialRecord:
    """A record as written after registering with password 'admin'."""
    from apictl.auth.keys import encrypt_client_secret

    return EnvironmentCredentialRecord(
        client_id="cached-client-id",
        client_secret=encrypt_client_secret("admin", "cached-client-secret"),
        username="admin",
    )


@pytest.fixture
def mock_httpx_client() -> httpx.AsyncClient:
    """Mock httpx.AsyncClient."""
    client = MagicMock(spec=httpx.AsyncClient)
    client.post = AsyncMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock()
    client.is_closed = False
    client.aclose = AsyncMock()
    return client


def _make_response(status_code: int, body: bytes = b"") -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.content = body
    response.text = body.decode()
    response.headers = httpx.Headers({})
    return response


@pytest.fixture
def make_response():
    """Factory for mock httpx.Response objects with a status and raw body."""
    return _make_response


@pytest.fixture
def build_test_context(tmp_path: Path, sample_config: Config):
    """Stand-in for cli.app.build_context that keeps every path under tmp_path."""

    def _build(ctx, console: Console | None = None) -> CommandContext:
        working_dir = tmp_path / "work"
        working_dir.mkdir(exist_ok=True)
        return CommandContext(
            working_dir=working_dir,
            config=sample_config,
            config_path=tmp_path / "config.toml",
            env_keys_path=tmp_path / "env_keys.json",
            console=console or Console(),
            verbose=ctx.meta.get("verbose", False),
            quiet=ctx.meta.get("quiet", False),
        )

    return _build
