"""CLI commands for pagination cursors."""

import json
import sys

import click

from rag_ingest.cursor import encode_cursor, decode_cursor


@click.group()
def cursor():
    """Encode and decode pagination cursors."""
    pass


@cursor.command('encode')
@click.argument('key_json')
def cursor_encode(key_json):
    """
    Encode a JSON object as a cursor.

    Example:
        rag-ingest cursor encode '{"sessionId": "abc", "createdAt": "2024-01-01"}'
    """
    try:
        key_map = json.loads(key_json)
    except ValueError as e:
        click.echo(click.style(f"✗ Invalid JSON: {e}", fg="red"), err=True)
        sys.exit(1)

    if not isinstance(key_map, dict):
        click.echo(click.style("✗ Cursor key must be a JSON object", fg="red"), err=True)
        sys.exit(1)

    click.echo(encode_cursor(key_map))


@cursor.command('decode')
@click.argument('token')
def cursor_decode(token):
    """Decode a cursor back to its JSON key."""
    key_map = decode_cursor(token)

    if key_map is None:
        click.echo(click.style("✗ Invalid cursor", fg="red"), err=True)
        sys.exit(1)

    click.echo(json.dumps(key_map, ensure_ascii=False, sort_keys=True))
