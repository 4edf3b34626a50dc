"""CLI entry point."""

import typer

app = typer.Typer(
    name="template-insight",
    help="Template Insight - Quality metrics for Jinja2 template codebases",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command to register it
from .analyze import analyze as _analyze  # noqa: F401, E402


def main() -> None:
    app()
