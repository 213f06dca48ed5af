"""CLI commands for sanitizing and chunking documents."""

import json
import sys

import click

from rag_ingest.config import load_config, ConfigError, CHUNKING_STRATEGIES
from rag_ingest.loader import DocumentLoader, DocumentLoadError
from rag_ingest.pipeline import IngestionPipeline
from rag_ingest.text import sanitize_text, utf16_length


@click.command('sanitize')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
def sanitize(path):
    """
    Print the sanitized text of a text or markdown file.

    Example:
        rag-ingest sanitize notes.md > notes.clean.md
    """
    try:
        with open(path, 'rb') as f:
            raw = f.read().decode('utf-8', errors='replace')
    except OSError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    cleaned = sanitize_text(raw)
    removed = utf16_length(raw) - utf16_length(cleaned)

    click.echo(cleaned, nl=False)
    click.echo(click.style(f"✓ Removed {removed} invalid characters", fg="green"), err=True)


@click.command('chunk')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', type=click.Path(exists=True), help='Config file path')
@click.option('--strategy', type=click.Choice(CHUNKING_STRATEGIES), help='Chunking strategy')
@click.option('--parent-size', type=int, help='Parent window size (small_to_big)')
@click.option('--child-size', type=int, help='Child window size (small_to_big)')
@click.option('--parent-overlap', type=int, help='Parent window overlap (small_to_big)')
@click.option('--child-overlap', type=int, help='Child window overlap (small_to_big)')
@click.option('--chunk-size', type=int, help='Chunk size (flat)')
@click.option('--overlap', type=int, help='Chunk overlap (flat)')
@click.option('--owner', default='local', show_default=True, help='Owner id stored on each record')
@click.option('--document-id', help='Document id (defaults to content hash)')
@click.option('--output', type=click.Path(dir_okay=False), help='Write JSON Lines here instead of stdout')
def chunk(path, config, strategy, parent_size, child_size, parent_overlap,
          child_overlap, chunk_size, overlap, owner, document_id, output):
    """
    Chunk a text or markdown file into vector records (JSON Lines).

    Command-line window options override the config file.

    Example:
        rag-ingest chunk report.md --parent-size 800 --child-size 200 \\
          --parent-overlap 100 --child-overlap 50 --output report.jsonl
    """
    try:
        if config:
            config_dict = dict(load_config(config).data)
        else:
            # No config file: no audit log unless one is configured
            config_dict = {'chunking': {}, 'audit_log': {'enabled': False}}

        overrides = {
            'strategy': strategy,
            'parent_size': parent_size,
            'child_size': child_size,
            'parent_overlap': parent_overlap,
            'child_overlap': child_overlap,
            'chunk_size': chunk_size,
            'overlap': overlap,
        }
        config_dict['chunking'] = {
            **config_dict.get('chunking', {}),
            **{key: value for key, value in overrides.items() if value is not None},
        }

        pipeline = IngestionPipeline(config_dict)
        records = pipeline.prepare_file(path, owner_id=owner, document_id=document_id)

    except ConfigError as e:
        click.echo(click.style(f"✗ Config error: {e}", fg="red"), err=True)
        sys.exit(1)
    except (DocumentLoadError, OSError) as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    lines = [json.dumps(record, ensure_ascii=False) for record in records]

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines) + '\n')
    else:
        for line in lines:
            click.echo(line)

    click.echo(click.style(
        f"✓ {len(records)} records ({pipeline.strategy}) from {path}", fg="green"
    ), err=True)


@click.command('scan')
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
def scan(directory):
    """
    List loadable documents in a directory with their sanitized sizes.

    Example:
        rag-ingest scan ./data/sample/
    """
    documents = DocumentLoader().load_directory(directory)

    if not documents:
        click.echo(click.style("⚠ No documents found.", fg="yellow"))
        return

    for document in documents:
        click.echo(f"{document['hash'][:16]}  {len(document['text']):>8}  {document['source_path']}")

    click.echo(click.style(f"✓ Found {len(documents)} documents", fg="green"))
