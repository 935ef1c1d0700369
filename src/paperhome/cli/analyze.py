"""
Analyze command: extract research field and keywords from a paper.
"""

import json
import sys
from pathlib import Path

import click

from paperhome.analysis.engine import AnalysisEngine
from paperhome.cli.formatting import console, print_error, print_header, print_success
from paperhome.cli.main import pass_context
from paperhome.cli.recommend import run_recommendation
from paperhome.service import RecommendationService
from paperhome.utils.exceptions import AnalysisError, ConfigurationError, DirectoryError


@click.command()
@click.argument("paper", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--recommend",
    "then_recommend",
    is_flag=True,
    help="Rank journals for the extracted field and keywords",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Output format",
)
@click.option("--limit", type=int, default=None, help="Show at most N journals per list")
@pass_context
def analyze(ctx, paper: Path, then_recommend: bool, output_format: str, limit):
    """Extract the research field and keywords from a paper (PDF, DOCX or text).

    Requires OPENAI_API_KEY (or llm.api_key in the config file).
    """
    config = ctx.config

    try:
        engine = AnalysisEngine(config.llm)
        if output_format == "table":
            with console.status(f"[cyan]Analyzing {paper.name}..."):
                analysis = engine.analyze_file(paper)
        else:
            analysis = engine.analyze_file(paper)
    except (AnalysisError, ConfigurationError) as e:
        print_error(str(e))
        sys.exit(1)

    if analysis is None:
        print_error("The paper could not be analyzed (see log for details)")
        sys.exit(1)

    if output_format == "json" and not then_recommend:
        click.echo(json.dumps(analysis.model_dump(), indent=2, ensure_ascii=False))
        return

    if output_format == "table":
        print_header("Paper Analysis", paper.name)
        console.print(f"[bold]Field:[/bold] {analysis.field}")
        console.print(f"[bold]Keywords:[/bold] {', '.join(analysis.keywords)}")
        if analysis.summary:
            console.print(f"[bold]Summary:[/bold] {analysis.summary}")
        print_success("Analysis complete")

    if then_recommend:
        query = analysis.to_query()
        try:
            service = RecommendationService.from_config(config)
        except DirectoryError as e:
            print_error(str(e))
            raise click.Abort()
        response = run_recommendation(
            service,
            {"field": query.field, "keywords": query.keywords},
            output_format,
            limit,
        )
        if not response.ok:
            sys.exit(1)
