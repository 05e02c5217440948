import typer
from gitcache.commands import cache, config
from gitcache.logging import setup_logging, get_logger

app = typer.Typer(
    help="[bold blue]gitcache[/bold blue] - local caches of remote git branches",
    rich_markup_mode="rich",
)

app.add_typer(config.app, name="config")

# Cache commands sit at the top level
app.command("open")(cache.open_locator)
app.command("path")(cache.show_path)


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]gitcache[/bold blue] - local caches of remote git branches

    Mirrors one branch of a remote repository in a local cache and keeps it
    in sync when that needs no merge. Locators look like path[branch].
    """
    if not ctx.invoked_subcommand:
        print("Welcome to gitcache! To proceed type gitcache --help")


def main():
    setup_logging()
    logger = get_logger("gitcache.main")
    logger.info("gitcache CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("gitcache CLI finished")


if __name__ == "__main__":
    main()
