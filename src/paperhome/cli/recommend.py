"""
Recommend command: rank journals for a field and keywords.
"""

import sys
from contextlib import nullcontext
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import click

from paperhome.cli.formatting import (
    console,
    print_error,
    print_header,
    print_info,
    print_results_table,
)
from paperhome.cli.main import pass_context
from paperhome.core.models import ScoredCandidate
from paperhome.service import RecommendationService, ServiceResponse
from paperhome.utils.exceptions import DirectoryError


def render_response(response: ServiceResponse, output_format: str, limit: Optional[int]) -> None:
    """Print a service response as JSON or as tables."""
    if output_format == "json":
        click.echo(response.to_json())
        return

    if not response.ok:
        print_error(response.body.get("error", "Request failed"))
        return

    for title, key in (
        ("National Journals (SINTA)", "national"),
        ("International Journals (Scopus)", "international"),
    ):
        journals = [ScoredCandidate.model_validate(c) for c in response.body.get(key, [])]
        print_results_table(title, journals, limit=limit)
        console.print()


def run_recommendation(
    service: RecommendationService,
    payload: Union[str, Dict[str, Any]],
    output_format: str,
    limit: Optional[int],
) -> ServiceResponse:
    """Handle a request and print the outcome."""
    if output_format == "table":
        print_header("PaperHome", "Journal recommendations")
        if service.orchestrator.provider is None:
            print_info("ELSEVIER_API_KEY not set: international journals are skipped")
        status = console.status("[cyan]Ranking journals...")
    else:
        status = nullcontext()

    with status:
        response = service.handle(payload)

    render_response(response, output_format, limit)
    return response


@click.command()
@click.option("--field", "-f", type=str, default="", help="Research field (e.g. 'Communication')")
@click.option(
    "--keyword", "-k",
    "keywords",
    multiple=True,
    help="Paper keyword (repeat for several, most important first)",
)
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON request file with 'field' and 'keywords'",
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
def recommend(
    ctx,
    field: str,
    keywords: Tuple[str, ...],
    input_path: Optional[Path],
    output_format: str,
    limit: Optional[int],
):
    """Recommend journals for a research field and keywords.

    \b
    Examples:
      paperhome recommend -f Communication -k media -k broadcasting
      paperhome recommend --input request.json --format json
    """
    payload: Union[str, Dict[str, Any]]
    if input_path:
        payload = input_path.read_text(encoding="utf-8")
    else:
        payload = {"field": field, "keywords": list(keywords)}

    try:
        service = RecommendationService.from_config(ctx.config)
    except DirectoryError as e:
        print_error(str(e))
        raise click.Abort()

    response = run_recommendation(service, payload, output_format, limit)

    if not response.ok:
        sys.exit(1)
