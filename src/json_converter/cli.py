"""Command-line interface for the JSON Converter."""

import logging
import sys
from typing import Any

import click

from . import __version__
from .codecs import CODECS
from .converter import Converter

DEMO_JSON = '{"name":"zy","num":10}'


@click.group()
@click.version_option(version=__version__)
def main():
    """JSON Converter - Format values to JSON and parse JSON into typed values."""
    pass


@main.command()
def demo():
    """Parse a small JSON object into a dict and print it."""
    converter = Converter()
    click.echo(converter.parse(DEMO_JSON, dict))


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'))
@click.option('--as', 'shape', type=click.Choice(['object', 'list', 'map']), default='object',
              help='Shape to parse into (default: object)')
@click.option('--codec', '-c', type=click.Choice(CODECS), default='json',
              help='JSON engine (default: json)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def parse(input_file, shape: str, codec: str, verbose: bool):
    """Parse a JSON file (or - for stdin) and print it back as JSON."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    converter = Converter(codec=codec)
    text = input_file.read()

    if shape == 'list':
        result = converter.parse_as_sequence_result(text, Any)
    elif shape == 'map':
        result = converter.parse_as_mapping_result(text, str, Any)
    else:
        result = converter.parse_result(text, Any)

    if not result.success:
        click.echo(f"❌ Could not parse {input_file.name} as {shape}: {result.error.type.value}", err=True)
        sys.exit(1)

    click.echo(converter.codec.encode(result.value))


if __name__ == '__main__':
    main()
