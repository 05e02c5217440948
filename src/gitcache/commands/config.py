"""
Settings commands for the cache: cache root, account identity, password.
"""

from typing import Optional

import typer
from rich.prompt import Prompt

from gitcache.logging import get_logger
from gitcache.logging.config import LogLevel
from gitcache.utils.config_store import ConfigStore
from gitcache.utils.console import display_panel, error, success, warning

app = typer.Typer(help="Manage gitcache settings")
logger = get_logger("gitcache.commands.config")


@app.command("show")
def show_config() -> None:
    """Show current settings (the password is never displayed)"""
    store = ConfigStore()
    stored = store.get_settings()

    lines = [
        f"cache_dir: {store.get_cache_dir()}",
        f"account_identity: {stored.get('account_identity') or '-'}",
        f"password: {'set' if store.get_password() else 'not set'}",
        f"log_level: {stored.get('log_level', LogLevel.INFO.value)}",
    ]
    display_panel("\n".join(lines), "gitcache settings", "blue")


@app.command("set")
def set_config(
    cache_dir: Optional[str] = typer.Option(None, "--cache-dir", help="Cache root directory"),
    identity: Optional[str] = typer.Option(
        None, "--identity", help="Account identity for https remotes"
    ),
    password: bool = typer.Option(
        False, "--password", help="Prompt for the password / ssh key passphrase"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Update stored settings"""
    store = ConfigStore()
    updates = {}

    if cache_dir:
        updates["cache_dir"] = cache_dir
    if identity is not None:
        updates["account_identity"] = identity
    if log_level:
        level = log_level.upper()
        if level not in [lev.value for lev in LogLevel]:
            error(f"Invalid log level: {log_level}")
            raise typer.Exit(1)
        updates["log_level"] = level

    if password:
        store.store_password(Prompt.ask("Password", password=True))
        logger.info("Stored password in keyring")

    if not updates and not password:
        warning("Nothing to update")
        return

    if updates:
        store.save_settings(updates)
        logger.info(f"Updated settings: {', '.join(sorted(updates))}")
    success("Settings updated")
