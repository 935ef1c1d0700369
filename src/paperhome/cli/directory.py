"""
Directory command: browse the local curated journal list.
"""

import click

from paperhome.cli.formatting import print_directory_table, print_error, print_info
from paperhome.cli.main import pass_context
from paperhome.directory.local import LocalDirectory
from paperhome.utils.exceptions import DirectoryError


@click.command()
@click.argument("field", required=False, default="")
@pass_context
def directory(ctx, field: str):
    """List national journals, optionally only those matching FIELD."""
    try:
        local = LocalDirectory.from_config(ctx.config.directory)
    except DirectoryError as e:
        print_error(str(e))
        raise click.Abort()

    journals = local.lookup(field)
    if not journals:
        print_info(f"No journals found for field '{field}'")
        return

    title = f"Journals for '{field}'" if field else "All journals"
    print_directory_table(f"{title} ({len(journals)})", journals)
