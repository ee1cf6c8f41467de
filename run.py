#!/usr/bin/env python3
"""
cardbox command line.

    python run.py --action server --reload -v
    python run.py --action config
    python run.py --action test --test-type integration
    python run.py --action info

Must be started from the project root (the directory holding .project_root).
"""

import subprocess
import sys

import click

from cardbox.backend.core.config import get_app_config, validate_project_root
from cardbox.backend.core.logging import get_logger, setup_logging

logger = get_logger("cardbox.run")

TEST_PATHS = {
    "all": "tests/",
    "unit": "tests/unit",
    "integration": "tests/integration",
}


def run_server(host: str | None, port: int | None, reload: bool) -> None:
    """Serve cardbox.backend.main:app with uvicorn in a child process."""
    server = get_app_config().application.server
    host = host or server.host
    port = port or server.port

    cmd = [
        sys.executable, "-m", "uvicorn", "cardbox.backend.main:app",
        "--host", host, "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")

    logger.info("Starting server", extra={"host": host, "port": port, "reload": reload})
    click.echo(f"Serving on http://{host}:{port} (Ctrl+C to stop)")
    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server exited with an error", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def _echo_section(title: str, values: dict) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * len(title))
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"  {key}:")
            for sub_key, sub_value in value.items():
                click.echo(f"    {sub_key}: {sub_value}")
        else:
            click.echo(f"  {key}: {value}")


def show_config() -> None:
    """Print the validated YAML settings; the password placeholder is masked."""
    try:
        config = get_app_config()
    except (ValueError, FileNotFoundError) as e:
        click.echo(click.style(f"Invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)

    database = config.database.model_dump()
    database["url"] = database["url"].replace("{password}", "***")

    _echo_section("application.yaml", config.application.model_dump())
    _echo_section("database.yaml", database)
    _echo_section("logging.yaml", config.logging.model_dump())


def run_tests(test_type: str) -> None:
    cmd = [sys.executable, "-m", "pytest", TEST_PATHS[test_type], "-v"]
    logger.info("Running tests", extra={"type": test_type})
    click.echo(" ".join(cmd))
    sys.exit(subprocess.run(cmd).returncode)


def show_info() -> None:
    app = get_app_config().application
    click.echo(f"{app.name} {app.version} ({app.environment})")
    click.echo(app.description)
    click.echo()
    click.echo("Actions:")
    click.echo("  --action server   Start the API server")
    click.echo("  --action config   Show the loaded configuration")
    click.echo("  --action test     Run the test suite")
    click.echo("  --action info     Show this summary")


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "test", "info"]),
    default="info",
    show_default=True,
    help="What to do.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log at INFO level.")
@click.option("--debug", "-d", is_flag=True, help="Log at DEBUG level.")
@click.option("--host", default=None, help="Bind address (server).")
@click.option("--port", default=None, type=int, help="Bind port (server).")
@click.option("--reload", is_flag=True, help="Restart on code changes (server).")
@click.option(
    "--test-type",
    type=click.Choice(list(TEST_PATHS)),
    default="all",
    show_default=True,
    help="Which tests to run (test).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
) -> None:
    """Run the cards API server, inspect its configuration or run its tests."""
    validate_project_root()
    setup_logging(
        level="DEBUG" if debug else "INFO" if verbose else "WARNING",
        format_type="console",
    )

    if action == "server":
        run_server(host, port, reload)
    elif action == "config":
        show_config()
    elif action == "test":
        run_tests(test_type)
    else:
        show_info()


if __name__ == "__main__":
    main()
