"""
Cache commands: open a locator through the cache, show where it lives.
"""

import typer

from gitcache.logging import get_logger
from gitcache.utils.console import error, info, success, warning, create_table, console
from gitcache.utils.git.errors import ParseError
from gitcache.utils.git.locator import parse_locator
from gitcache.utils.git.manager import GitCacheManager

logger = get_logger("gitcache.commands.cache")


def open_locator(
    locator: str = typer.Argument(..., help="Repository locator, e.g. https://host/repo[main]"),
) -> None:
    """Open (cloning or synchronizing) the cache for a locator"""
    manager = GitCacheManager()
    result = manager.open(locator)

    if result is None:
        error(f"'{locator}' is not a git locator; expected path[branch]")
        raise typer.Exit(1)

    if result.repo is None:
        if result.error is None:
            error(f"'{result.locator.raw_path}' is not a git repository")
        logger.error(f"Could not open {result.locator}")
        raise typer.Exit(1)

    try:
        table = create_table("Git cache", ["Setting", "Value"])
        table.add_row("Locator", str(result.locator))
        table.add_row("Branch", result.branch)
        table.add_row("Repository", str(result.repo.working_dir or result.repo.git_dir))
        if result.cache_path:
            table.add_row("Cache", str(result.cache_path))
        if result.cloned:
            table.add_row("Sync", "cloned")
        elif result.sync:
            table.add_row("Sync", str(result.sync))
        console.print(table)
    finally:
        result.repo.close()

    if result.sync and result.sync.reason:
        warning(f"Using cached state: {result.sync.message}")
    else:
        success("Repository ready")


def show_path(
    locator: str = typer.Argument(..., help="Repository locator, e.g. https://host/repo[main]"),
) -> None:
    """Show the cache directory used for a locator"""
    try:
        parsed = parse_locator(locator)
    except ParseError as e:
        error(str(e))
        raise typer.Exit(1)

    cache_path = GitCacheManager().cache_path(parsed)
    if cache_path is None:
        info(f"Local repository, used in place: {parsed.raw_path}")
        return

    logger.debug(f"Cache path for {parsed}: {cache_path}")
    info(str(cache_path))
