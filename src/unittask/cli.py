"""Command-line interface for UnitTask."""

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from unittask import __version__
from unittask.config import UnitTaskConfig, create_example_config, get_default_config
from unittask.core.discovery import TestDiscovery
from unittask.core.task import create_unit_test_task
from unittask.framework.runner import TestFramework
from unittask.host.runner import TaskRunner
from unittask.logs import configure_logging


console = Console()


def print_banner() -> None:
    """Print the UnitTask banner."""
    console.print(
        Panel.fit(
            "[bold blue]UnitTask[/bold blue] - unit tests as tasks",
            subtitle=f"v{__version__}",
        )
    )


def load_config(config_path: Optional[str]) -> tuple[UnitTaskConfig, Path]:
    """Load the configuration and the directory its paths are relative to.

    Without an explicit path, the nearest configuration file is used, or the
    defaults when there is none.
    """
    if config_path:
        return UnitTaskConfig.from_file(config_path), Path(config_path).parent

    try:
        found = UnitTaskConfig.find_config_file()
    except FileNotFoundError:
        return get_default_config(), Path.cwd()
    return UnitTaskConfig.from_file(found), found.parent


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="unittask.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
def init(output: str, force: bool) -> None:
    """Initialize a new UnitTask configuration file."""
    print_banner()

    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(
            f"[yellow]Configuration file already exists:[/yellow] {output_path}"
        )
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        create_example_config(output_path)
        console.print(f"[green]Created configuration file:[/green] {output_path}")
        console.print("\nNext steps:")
        console.print("  1. Point tests.start_directory at your unittest modules")
        console.print("  2. Run [bold]unittask test --list[/bold] to see the test cases")
        console.print("  3. Run [bold]unittask test[/bold] to execute them")
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {e}")
        sys.exit(1)


def build_cli(framework: Optional[TestFramework] = None) -> click.Group:
    """Build the command group with the unit test task registered as ``test``."""
    framework = framework or TestFramework()
    discovery = TestDiscovery(framework=framework)

    runner = TaskRunner()
    runner.add_task("test", create_unit_test_task(discovery, framework=framework))

    @click.group()
    @click.version_option(version=__version__, prog_name="unittask")
    @click.option(
        "--config",
        "-c",
        type=click.Path(exists=False),
        help="Path to configuration file (default: unittask.json)",
    )
    @click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
    @click.pass_context
    def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
        """UnitTask - run unittest suites as tasks.

        Lists or runs the discovered test cases, optionally filtered by
        substrings of their descriptions, and summarizes the results.
        """
        ctx.ensure_object(dict)
        ctx.obj["verbose"] = verbose
        ctx.obj["config_path"] = config

        if ctx.invoked_subcommand not in runner.tasks:
            return

        try:
            loaded, base_dir = load_config(config)
        except FileNotFoundError as e:
            console.print(f"[red]Error:[/red] {e}")
            console.print("Run [bold]unittask init[/bold] to create a configuration file")
            sys.exit(1)
        except (ValidationError, ValueError) as e:
            console.print(f"[red]Invalid configuration:[/red] {e}")
            sys.exit(1)

        configure_logging(
            "TRACE" if verbose else loaded.logging.level,
            show_time=loaded.logging.show_time,
        )
        discovery.configure(loaded.tests, base_dir)
        runner.timeout = loaded.task.timeout_seconds
        ctx.obj["config"] = loaded

    main.add_command(init)
    return runner.attach(main)


def main() -> None:
    """Console script entry point."""
    build_cli()(prog_name="unittask")


if __name__ == "__main__":
    main()
