"""Tests for security/sink.py (writing encrypted secrets)."""

from __future__ import annotations

import yaml

from apictl.models import OutputType
from apictl.security import properties
from apictl.security.sink import (
    MANIFEST_FILE_NAME,
    PROPERTIES_FILE_NAME,
    emit,
    secret_file_path,
)

SECRETS = {"db_password": "Y2lwaGVy+/==", "api_key": "b3RoZXI="}


class TestConsoleOutput:
    """Tests for console output."""

    def test_prints_alias_and_ciphertext(self, command_ctx):
        """Each secret is printed as 'alias : ciphertext'."""
        result = emit(command_ctx, SECRETS, OutputType.CONSOLE)

        output = command_ctx.console.file.getvalue()
        assert result is None
        assert "db_password : Y2lwaGVy+/==" in output
        assert "api_key : b3RoZXI=" in output

    def test_long_ciphertext_not_wrapped(self, command_ctx):
        """A 344 character ciphertext stays on one line."""
        ciphertext = "A" * 344

        emit(command_ctx, {"alias": ciphertext}, OutputType.CONSOLE)

        assert f"alias : {ciphertext}\n" in command_ctx.console.file.getvalue()

    def test_no_files_written(self, command_ctx):
        """Console output leaves the working directory untouched."""
        emit(command_ctx, SECRETS, OutputType.CONSOLE)

        assert list(command_ctx.working_dir.iterdir()) == []

    def test_unknown_label_falls_back_to_console(self, command_ctx):
        """Unrecognised labels print to the console."""
        result = emit(command_ctx, SECRETS, "xml")

        assert result is None
        assert "db_password : " in command_ctx.console.file.getvalue()


class TestPropertiesFileOutput:
    """Tests for properties file output."""

    def test_writes_properties_file(self, command_ctx):
        """Secrets go to security/wso2mi-secrets.properties."""
        path = emit(command_ctx, SECRETS, OutputType.FILE)

        assert path == command_ctx.working_dir / "security" / PROPERTIES_FILE_NAME
        assert path.read_text().splitlines()[0].startswith("db_password=Y2lwaGVy+/")
        assert properties.load(path) == SECRETS

    def test_label_is_case_insensitive(self, command_ctx):
        """'FILE' selects file output."""
        path = emit(command_ctx, SECRETS, "FILE")

        assert path.name == PROPERTIES_FILE_NAME

    def test_overwrites_previous_file(self, command_ctx):
        """A second run replaces the previous output."""
        emit(command_ctx, SECRETS, OutputType.FILE)
        path = emit(command_ctx, {"only": "one"}, OutputType.FILE)

        assert properties.load(path) == {"only": "one"}

    def test_reports_location(self, command_ctx):
        """The file location is printed."""
        path = emit(command_ctx, SECRETS, OutputType.FILE)

        output = command_ctx.console.file.getvalue()
        assert "Secret properties file created" in output
        assert path.name in output


class TestKubernetesOutput:
    """Tests for Kubernetes manifest output."""

    def test_writes_opaque_secret(self, command_ctx):
        """The manifest is an Opaque Secret with default name and namespace."""
        path = emit(command_ctx, SECRETS, OutputType.K8)

        assert path == command_ctx.working_dir / "security" / MANIFEST_FILE_NAME
        manifest = yaml.safe_load(path.read_text())
        assert manifest == {
            "apiVersion": "v1",
            "kind": "Secret",
            "metadata": {"name": "wso2misecret", "namespace": "default"},
            "stringData": SECRETS,
            "type": "Opaque",
        }

    def test_warns_about_defaults(self, command_ctx):
        """The user is told the defaults may need changing."""
        emit(command_ctx, SECRETS, "k8")

        output = command_ctx.console.file.getvalue()
        assert "Kubernetes secret file created" in output
        assert "change the default values" in output


class TestSecretFilePath:
    """Tests for secret_file_path."""

    def test_creates_security_directory(self, command_ctx):
        """The security directory is created under the working directory."""
        path = secret_file_path(command_ctx, "out.txt")

        assert path.parent.is_dir()
        assert path.parent == command_ctx.working_dir / "security"
