#!/usr/bin/env python3
"""
Command-line interface for the class map resolver.
"""

import json
import logging
from pathlib import Path

import click
from tqdm import tqdm

from classmap.config import ResolverConfig, load_config
from classmap.core.errors import AutoloadError, RebuildNotAllowed
from classmap.core.resolver import ClassMapResolver
from classmap.core.runtime import IncludeRuntime


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _make_resolver(ctx) -> ClassMapResolver:
    config = ctx.obj['config']
    return ClassMapResolver(config, IncludeRuntime(config.keywords))


@click.group()
@click.option('--config', '-c', default='classmap.yaml', help='Configuration file (YAML or JSON)')
@click.option('--root', '-r', type=click.Path(file_okay=False), help='Source root (overrides config)')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, config, root, verbose):
    """Resolve PHP class names to the files that declare them"""
    ctx.ensure_object(dict)

    config_path = Path(config)
    try:
        if config_path.exists():
            resolver_config = load_config(config_path)
        else:
            resolver_config = ResolverConfig(root=Path('.').resolve())
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration {config_path}: {e}")

    if root:
        resolver_config.root = Path(root).resolve()
    ctx.obj['config'] = resolver_config

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.pass_context
def build(ctx):
    """Scan the source tree and rewrite the cache"""
    resolver = _make_resolver(ctx)

    with tqdm(desc='Scanning', unit='file', disable=None) as progress:
        resolver.scanner.on_file = lambda _path: progress.update(1)
        try:
            class_map = resolver.rebuild()
        except RebuildNotAllowed:
            raise click.ClickException("Rebuilding is disabled by configuration")
        except AutoloadError as e:
            raise click.ClickException(str(e))

    click.echo(f"✓ Mapped {len(class_map)} symbols")
    click.echo(f"  Cache: {resolver.cache_location}")


@cli.command()
@click.argument('name')
@click.pass_context
def which(ctx, name):
    """Print the file that declares NAME"""
    resolver = _make_resolver(ctx)

    try:
        path = resolver.find_file(name)
        if path is None:
            try:
                resolver.rebuild()
            except RebuildNotAllowed:
                pass
            path = resolver.find_file(name)
    except AutoloadError as e:
        raise click.ClickException(str(e))

    if path is None:
        click.echo(f"{name} not found", err=True)
        ctx.exit(1)
    click.echo(str(path))


@cli.command(name='list')
@click.option('--format', '-F', 'output_format', type=click.Choice(['table', 'json']), default='table')
@click.pass_context
def list_symbols(ctx, output_format):
    """Dump the class map"""
    resolver = _make_resolver(ctx)

    try:
        class_map = resolver.class_map
    except AutoloadError as e:
        raise click.ClickException(str(e))

    if output_format == 'json':
        click.echo(json.dumps(dict(sorted(class_map.items())), indent=2))
        return

    if not class_map:
        click.echo("No symbols")
        return

    width = max(len(name) for name in class_map)
    for name in sorted(class_map):
        click.echo(f"{name.ljust(width)} | {class_map[name]}")


@cli.command()
@click.pass_context
def expire(ctx):
    """Delete the cache file"""
    resolver = _make_resolver(ctx)
    resolver.expire_cache()
    click.echo(f"Expired {resolver.cache_location}")


@cli.command()
@click.pass_context
def stats(ctx):
    """Show class map statistics"""
    resolver = _make_resolver(ctx)

    try:
        class_map = resolver.class_map
    except AutoloadError as e:
        raise click.ClickException(str(e))

    click.echo("Class Map Statistics:")
    click.echo(f"  Root: {resolver.root}")
    click.echo(f"  Symbols: {len(class_map)}")
    click.echo(f"  Files: {len(set(class_map.values()))}")
    click.echo(f"  Cache: {resolver.cache_location} ({'present' if resolver.cache_store.exists() else 'missing'})")
    click.echo(f"  Rebuilt this run: {'yes' if resolver.rebuilt else 'no'}")


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == '__main__':
    main()
