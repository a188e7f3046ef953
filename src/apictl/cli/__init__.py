"""CLI framework for apictl."""
from __future__ import annotations

from apictl.cli.app import ExitCode
from apictl.cli.app import app
from apictl.cli.app import run_app

__all__ = ["app", "run_app", "ExitCode"]
