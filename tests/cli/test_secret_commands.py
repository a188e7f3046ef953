"""Tests for the secret command group."""

from __future__ import annotations

import base64
from unittest.mock import patch

import yaml
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from typer.testing import CliRunner

from apictl.cli.app import ExitCode, app
from apictl.cli.commands import secret as secret_module
from apictl.security import properties
from apictl.security.keystore import read_keystore_config

runner = CliRunner()

OAEP_SHA1 = padding.OAEP(
    mgf=padding.MGF1(algorithm=hashes.SHA1()), algorithm=hashes.SHA1(), label=None
)


class TestSecretInit:
    """Tests for 'apictl secret init'."""

    def test_saves_keystore_details(self, build_test_context, keystore_config, tmp_path):
        """Valid answers are written to keystore-info.properties."""
        target = tmp_path / "config" / "mi-security" / "keystore-info.properties"
        answers = "\n".join(
            [
                keystore_config.location,
                keystore_config.password,
                keystore_config.key_alias,
                keystore_config.key_password,
            ]
        )

        with patch.object(secret_module, "build_context", build_test_context), patch.object(
            secret_module, "keystore_properties_file", return_value=target
        ):
            result = runner.invoke(app, ["secret", "init"], input=answers + "\n")

        assert result.exit_code == 0
        assert "Key Store initialization completed" in result.output
        assert read_keystore_config(target) == keystore_config

    def test_wrong_password_writes_nothing(
        self, build_test_context, keystore_config, tmp_path
    ):
        """A bad store password fails without saving."""
        target = tmp_path / "config" / "mi-security" / "keystore-info.properties"
        answers = "\n".join([keystore_config.location, "wrong", "wso2carbon", "wrong"])

        with patch.object(secret_module, "build_context", build_test_context), patch.object(
            secret_module, "keystore_properties_file", return_value=target
        ):
            result = runner.invoke(app, ["secret", "init"], input=answers + "\n")

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert not target.exists()


class TestSecretCreate:
    """Tests for 'apictl secret create'."""

    def _invoke(self, build_test_context, keystore_properties, args, input=None):
        with patch.object(secret_module, "build_context", build_test_context), patch.object(
            secret_module, "keystore_properties_file", return_value=keystore_properties
        ):
            return runner.invoke(app, ["secret", "create", *args], input=input)

    def test_console_secret(self, build_test_context, keystore_properties, rsa_private_key):
        """A prompted secret is printed encrypted."""
        result = self._invoke(
            build_test_context, keystore_properties, [], input="db_password\ns3cret\ns3cret\n"
        )

        assert result.exit_code == 0
        line = next(
            line for line in result.output.splitlines() if line.startswith("db_password : ")
        )
        ciphertext = base64.b64decode(line.split(" : ", 1)[1])
        assert rsa_private_key.decrypt(ciphertext, OAEP_SHA1) == b"s3cret"
        assert "s3cret\n" not in result.output

    def test_empty_alias_rejected(self, build_test_context, keystore_properties):
        """An empty alias fails validation."""
        result = self._invoke(build_test_context, keystore_properties, [], input="\n")

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "Invalid input for alias" in result.output

    def test_empty_secret_rejected(self, build_test_context, keystore_properties):
        """An empty secret fails validation and names the alias."""
        result = self._invoke(
            build_test_context, keystore_properties, [], input="db_password\n\n\n"
        )

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "Invalid input for db_password" in result.output

    def test_bulk_to_properties_file(
        self, build_test_context, keystore_properties, rsa_private_key, tmp_path
    ):
        """-f encrypts every entry and -o file writes them out."""
        input_file = tmp_path / "plain.properties"
        input_file.write_text("db=pw1\napi=pw2\n")

        result = self._invoke(
            build_test_context,
            keystore_properties,
            ["-o", "file", "-f", str(input_file)],
        )

        assert result.exit_code == 0
        written = properties.load(tmp_path / "work" / "security" / "wso2mi-secrets.properties")
        assert {
            alias: rsa_private_key.decrypt(base64.b64decode(value), OAEP_SHA1)
            for alias, value in written.items()
        } == {"db": b"pw1", "api": b"pw2"}

    def test_bulk_to_kubernetes_with_pkcs1(
        self, build_test_context, keystore_properties, rsa_private_key, tmp_path
    ):
        """-o k8 writes a manifest and -c selects PKCS#1 padding."""
        input_file = tmp_path / "plain.properties"
        input_file.write_text("db=pw1\n")

        result = self._invoke(
            build_test_context,
            keystore_properties,
            ["-o", "k8", "-c", "RSA/ECB/PKCS1Padding", "-f", str(input_file)],
        )

        assert result.exit_code == 0
        manifest = yaml.safe_load(
            (tmp_path / "work" / "security" / "wso2mi-secrets.yaml").read_text()
        )
        ciphertext = base64.b64decode(manifest["stringData"]["db"])
        assert rsa_private_key.decrypt(ciphertext, padding.PKCS1v15()) == b"pw1"

    def test_bulk_empty_value_rejected(self, build_test_context, keystore_properties, tmp_path):
        """Empty values in the input file are reported by key."""
        input_file = tmp_path / "plain.properties"
        input_file.write_text("db=pw1\nblank=\n")

        result = self._invoke(
            build_test_context, keystore_properties, ["-o", "file", "-f", str(input_file)]
        )

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "Invalid input for blank" in result.output
        assert not (tmp_path / "work" / "security").exists()

    def test_bulk_latin1_file(
        self, build_test_context, keystore_properties, rsa_private_key, tmp_path
    ):
        """ISO-8859-1 input files are encrypted as the characters they hold."""
        input_file = tmp_path / "plain.properties"
        input_file.write_bytes(b"db=caf\xe9\n")

        result = self._invoke(
            build_test_context, keystore_properties, ["-o", "file", "-f", str(input_file)]
        )

        assert result.exit_code == 0
        written = properties.load(tmp_path / "work" / "security" / "wso2mi-secrets.properties")
        plaintext = rsa_private_key.decrypt(base64.b64decode(written["db"]), OAEP_SHA1)
        assert plaintext.decode("utf-8") == "café"

    def test_unreadable_input_file(self, build_test_context, keystore_properties, tmp_path):
        """A directory given as the input file exits with VALIDATION_ERROR."""
        result = self._invoke(
            build_test_context, keystore_properties, ["-o", "file", "-f", str(tmp_path)]
        )

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "Cannot read input file" in result.output

    def test_missing_keystore_details(self, build_test_context, tmp_path):
        """Running before init exits with CONFIG_ERROR."""
        result = self._invoke(
            build_test_context,
            tmp_path / "missing.properties",
            [],
            input="db_password\ns3cret\ns3cret\n",
        )

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "secret init" in result.output
