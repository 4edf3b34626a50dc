"""The analysis command: discover, analyze, grade and render."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..analysis import BatchAnalysisResult, BatchAnalyzer, TemplateAnalyzer
from ..config import AnalysisConfig
from ..dimensions import DIMENSIONS, get_dimension
from ..exceptions import TemplateInsightError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from ..report import QualityReportBuilder, build_dimension_report
from ..scanning import TemplateFinder
from . import app
from ._common import console, err_console, resolve_config


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"template-insight {__version__}")
        raise typer.Exit(0)


def run_batch(root: Path, settings: AnalysisConfig, show_status: bool = True) -> BatchAnalysisResult:
    """Discover and analyze every template under root."""
    templates = TemplateFinder(settings).find(root)
    analyzer = BatchAnalyzer(TemplateAnalyzer(settings.metrics), settings.encoding)
    if not show_status:
        return analyzer.analyze(templates)
    with err_console.status(f"Analyzing {len(templates)} template(s)..."):
        return analyzer.analyze(templates)


@app.command()
def analyze(
    dimension: Optional[str] = typer.Argument(
        None,
        help=f"Report a single dimension: {', '.join(DIMENSIONS)}",
        show_default=False,
    ),
    path: Optional[Path] = typer.Argument(
        None,
        help="Template directory or file to analyze (default: current directory)",
        show_default=False,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich or json",
    ),
    dir_depth: Optional[int] = typer.Option(
        None,
        "--dir-depth",
        min=1,
        help="Depth of the directory breakdown (default: 2)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    fail_under: Optional[float] = typer.Option(
        None,
        "--fail-under",
        min=0,
        max=100,
        help="Exit 1 when the health (or dimension) score is below this value",
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """
    Analyze a template codebase and report quality metrics.

    [bold]Examples:[/bold]

      template-insight templates/

      template-insight complexity templates/ --format json

      template-insight --fail-under 70 templates/
    """
    # A single argument that is not a dimension is the path
    if dimension is not None and dimension not in DIMENSIONS:
        if path is not None:
            raise typer.BadParameter(
                f"unknown dimension {dimension!r}; choose from {', '.join(DIMENSIONS)}",
                param_hint="DIMENSION",
            )
        path, dimension = Path(dimension), None
    root = path or Path.cwd()

    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        formatter = get_formatter(output_format)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--format")

    try:
        settings = resolve_config(config, dir_depth, verbose=verbose, quiet=quiet)
        batch = run_batch(root, settings, show_status=not quiet and output_format == "rich")

        if batch.failures and not quiet:
            err_console.print(
                f"[yellow]{len(batch.failures)} template(s) could not be analyzed[/yellow]"
            )
        if not batch.results:
            console.print(f"[red]No templates could be analyzed under {root}[/red]")
            raise typer.Exit(1)

        if dimension is not None:
            metrics = get_dimension(dimension, settings.metrics).evaluate(batch.results)
            report = build_dimension_report(dimension, batch.results, settings.metrics, metrics)
            score = metrics.score
        else:
            builder = QualityReportBuilder(
                settings.metrics, settings.max_dir_depth, settings.hotspot_limit
            )
            assessment = builder.assess(batch.results)
            report = builder.build(batch.results, assessment)
            score = assessment.health.score

        formatter.render(report)

        if fail_under is not None and score < fail_under:
            err_console.print(f"[red]--fail-under:[/red] score {score:.1f} is below {fail_under:.1f}")
            raise typer.Exit(1)

    except typer.Exit:
        raise

    except TemplateInsightError as e:
        logger.error(f"Analysis failed: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
