"""Explicit per-command context."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from apictl.config.paths import config_file, env_keys_file
from apictl.config.settings import Config, get_config


@dataclass
class CommandContext:
    """Everything a command needs that would otherwise be process-wide state.

    The working directory decides where secret files are written; the config
    and credential paths decide which environments and cached records are
    visible.
    """

    working_dir: Path = field(default_factory=Path.cwd)
    config: Config = field(default_factory=get_config)
    config_path: Path = field(default_factory=config_file)
    env_keys_path: Path = field(default_factory=env_keys_file)
    console: Console = field(default_factory=Console)
    verbose: bool = False
    quiet: bool = False

    def info(self, message: str) -> None:
        """Print an informational line unless quiet."""
        if not self.quiet:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Print a dim diagnostic line when verbose."""
        if self.verbose:
            self.console.print(f"[dim]{message}[/dim]")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {message}")
