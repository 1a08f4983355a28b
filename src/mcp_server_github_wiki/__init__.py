import click
from pathlib import Path
import os
from .server import serve


@click.command()
@click.option(
    "--env-file",
    "env_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory containing a .env file to load",
)
@click.option("-v", "--verbose", count=True)
@click.option(
    "--test-mode",
    is_flag=True,
    help="Run in test mode for CI (starts and exits without stdio)",
)
def main(env_dir: Path | None, verbose: int, test_mode: bool) -> None:
    """MCP GitHub Wiki Server - manage GitHub wiki pages over MCP"""
    import asyncio

    if verbose == 1:
        os.environ["LOG_LEVEL"] = "INFO"
    elif verbose >= 2:
        os.environ["LOG_LEVEL"] = "DEBUG"

    asyncio.run(serve(env_dir, test_mode=test_mode))


if __name__ == "__main__":
    main()
