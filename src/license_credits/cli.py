"""Command-line interface for license_credits.

Provides the main entry point and subcommands for generating credits
documents and inspecting credit catalogs.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from license_credits.config import CreditsConfig
from license_credits.database import CreditDatabase
from license_credits.exceptions import CreditsError
from license_credits.loader import load
from license_credits.models import ArtifactCoordinate
from license_credits.reporters import get_reporter
from license_credits.scanners import get_scanner
from license_credits.selection import select_credits

app = typer.Typer(
    name="license-credits",
    help="Open source credits generation from a curated credit catalog.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("license_credits")

DatabaseOption = Annotated[
    Optional[str],
    typer.Option(
        "--database",
        "-d",
        envvar="CREDITS_DATABASE_URL",
        help="Path or URL of the credit catalog (XML)",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
]


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("license_credits").setLevel(level)


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(code=1)


def _load_database(database: Optional[str]) -> CreditDatabase:
    """Load the credit catalog or exit with an error message."""
    if not database:
        raise _fail("Must specify --database or CREDITS_DATABASE_URL")

    try:
        return load(database)
    except CreditsError as e:
        logger.debug("Failed to load %s", database, exc_info=True)
        raise _fail(str(e))


@app.command()
def gen(
    deps: Annotated[
        Path,
        typer.Option(
            "--deps",
            "-D",
            help="Dependency list, one group:artifact[:version] per line",
            exists=True,
            readable=True,
        ),
    ],
    database: DatabaseOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file path (default: credits.<format>)",
        ),
    ] = None,
    fmt: Annotated[
        Optional[str],
        typer.Option(
            "--format",
            "-f",
            help="Output format: html or txt",
        ),
    ] = None,
    template: Annotated[
        Optional[Path],
        typer.Option(
            "--template",
            "-t",
            help="Custom Jinja2 template file",
            exists=True,
            readable=True,
        ),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Generate the credits document.

    Loads the credit catalog, matches the dependency list against it and
    renders every forced or matched credit, sorted by key.
    """
    _setup_logging(verbose)

    env = CreditsConfig.from_env()
    config = dataclasses.replace(
        env,
        database_url=database or env.database_url,
        template_path=template or env.template_path,
        output_format=(fmt or env.output_format).lower(),
    )

    try:
        config.validate()
        scanner = get_scanner(deps)
        dependencies = scanner.scan()
        reporter = get_reporter(config.output_format, config.template_path)
    except (ValueError, OSError) as e:
        raise _fail(str(e))

    if verbose:
        console.print(f"[dim]Using scanner: {scanner.source_name}[/dim]")

    credit_db = _load_database(config.database_url)

    try:
        credits = select_credits(credit_db, dependencies)
    except CreditsError as e:
        raise _fail(str(e))

    console.print(
        f"Selected [bold]{len(credits)}[/bold] credits "
        f"for {len(dependencies)} dependencies"
    )

    output_path = output or config.output_path
    try:
        reporter.write(credits, output_path)
    except Exception as e:
        raise _fail(f"writing output: {e}")

    console.print(f"[green]Generated:[/green] {output_path}")


@app.command()
def check(
    database: DatabaseOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate a credit catalog.

    Exit codes:
        0 - Catalog loaded and every reference resolved
        1 - The catalog is unreadable, malformed or inconsistent
    """
    _setup_logging(verbose)

    credit_db = _load_database(database)
    owners = {c.owner.key for c in credit_db.credits if c.owner.key}
    licenses = {c.license.key for c in credit_db.credits if c.license.key}

    console.print(
        f"[green]Valid catalog:[/green] {len(credit_db)} credits, "
        f"{len(credit_db.coordinates)} artifacts, "
        f"{len(owners)} referenced owners, {len(licenses)} referenced licenses"
    )


@app.command()
def show(
    database: DatabaseOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the credits of a catalog, sorted by key."""
    _setup_logging(verbose)

    credit_db = _load_database(database)

    table = Table(title="Credits")
    table.add_column("Key", style="bold")
    table.add_column("Force")
    table.add_column("Component")
    table.add_column("Owner")
    table.add_column("License")
    table.add_column("Artifacts")

    for credit in sorted(credit_db.all_credits(), key=lambda c: c.key):
        artifacts = "\n".join(str(a) for a in credit_db.artifacts_for(credit.key))
        table.add_row(
            credit.key,
            "yes" if credit.force else "",
            credit.component,
            credit.owner.text,
            credit.license.text,
            artifacts,
        )

    console.print(table)


@app.command()
def lookup(
    coordinate: Annotated[
        str,
        typer.Argument(help="Dependency as group:artifact[:version]"),
    ],
    database: DatabaseOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the credit disclosed for a dependency."""
    _setup_logging(verbose)

    try:
        artifact = ArtifactCoordinate.parse(coordinate)
    except ValueError as e:
        raise _fail(str(e))

    credit_db = _load_database(database)

    try:
        credit = credit_db.find(artifact)
    except CreditsError as e:
        raise _fail(str(e))

    if credit is None:
        console.print(f"[yellow]No credit found for {artifact}[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{credit.key}[/bold]")
    console.print(f"Component: {credit.component}")
    console.print(f"Owner: {credit.owner.text}")
    console.print(f"License: {credit.license.text}")


if __name__ == "__main__":
    app()
