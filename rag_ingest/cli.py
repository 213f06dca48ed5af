"""
Main CLI for the ingestion core.

Combines all subcommands: sanitize, chunk, scan, cursor
"""

import logging

import click
import colorama

from rag_ingest.cli_ingest import sanitize, chunk, scan
from rag_ingest.cli_cursor import cursor


@click.group()
@click.version_option(package_name='rag-ingest-core')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """RAG ingestion core - sanitize, chunk, and prepare documents for indexing."""
    colorama.just_fix_windows_console()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


# Add subcommands
cli.add_command(sanitize, 'sanitize')
cli.add_command(chunk, 'chunk')
cli.add_command(scan, 'scan')
cli.add_command(cursor, 'cursor')


if __name__ == '__main__':
    cli()
