"""Command-line interface for inkwell.

This module defines the CLI commands using the Click framework.

Commands:
- list: List the documents of a site.
- show: Print one document's front matter and body.
- check: Validate the front matter of every source file.
- export: Write the content store as JSON for an external renderer.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
import yaml

from . import __version__
from .config import load_config
from .content import DefaultDocumentBuilder, FileContentLoader
from .errors import ConfigError, MalformedFrontMatterError, NotFoundError
from .export import document_to_dict, dump_json, dumps_json
from .store import ContentStore, document_key

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

site_argument = click.argument(
    "site",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
drafts_option = click.option("--drafts", is_flag=True, help="Include _drafts")


@click.group()
@click.version_option(version=__version__, prog_name="inkwell")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Front matter content store for Jekyll-style blogs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)


@cli.command(name="list")
@site_argument
@drafts_option
@click.option("--category", help="Only documents filed under this category")
@click.option("--kind", type=click.Choice(["post", "page"]), help="Only posts or pages")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
def list_documents(
    site: Path, drafts: bool, category: str | None, kind: str | None, as_json: bool
):
    """List the documents of a site in discovery order."""
    docs = _load_site(site, drafts).list()
    if category:
        docs = docs.in_category(category)
    if kind == "post":
        docs = docs.posts()
    elif kind == "page":
        docs = docs.pages()

    if as_json:
        payload = [document_to_dict(doc, include_body=False) for doc in docs]
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    for doc in docs:
        click.echo(f"{doc.path}\t{doc.title}\t{doc.url}")


@cli.command()
@click.argument("path")
@click.option(
    "--site",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Site directory the path is relative to",
)
@drafts_option
@click.option("--body/--no-body", default=True, help="Print the body after the front matter")
def show(path: str, site: Path, drafts: bool, body: bool):
    """Print a document's front matter and body."""
    store = _load_site(site, drafts)
    try:
        doc = store.get(path)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from None

    click.echo("---")
    click.echo(
        yaml.safe_dump(dict(doc.front_matter), sort_keys=False, allow_unicode=True),
        nl=False,
    )
    click.echo("---")
    if body:
        click.echo(doc.body, nl=False)


@cli.command()
@site_argument
@drafts_option
def check(site: Path, drafts: bool):
    """Validate the front matter of every source file."""
    config = _load_config(site)
    sources = FileContentLoader(site, config).iter_files(include_drafts=drafts)
    builder = DefaultDocumentBuilder(config)

    failures = 0
    for source in sources:
        try:
            builder.build(source, document_key(source, site))
        except MalformedFrontMatterError as exc:
            failures += 1
            _report_malformed(exc)

    if failures:
        click.echo(
            click.style(f"{failures} of {len(sources)} files failed", fg="red", bold=True),
            err=True,
        )
        raise SystemExit(1)
    click.echo(f"Checked {len(sources)} files: all valid")


@cli.command()
@site_argument
@drafts_option
@click.option("--body/--no-body", default=True, help="Include document bodies")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to a file instead of stdout",
)
def export(site: Path, drafts: bool, body: bool, output: Path | None):
    """Export the content store as JSON."""
    store = _load_site(site, drafts)
    if output is None:
        click.echo(dumps_json(store, include_body=body))
        return
    with open(output, "w", encoding="utf-8") as f:
        dump_json(store, f, include_body=body)
    click.echo(f"Exported {len(store)} documents to {output}", err=True)


def _load_config(site: Path) -> dict:
    try:
        return load_config(site)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from None


def _load_site(site: Path, drafts: bool) -> ContentStore:
    """Load a site, turning content errors into CLI failures."""
    config = _load_config(site)
    try:
        return ContentStore.from_site(site, config=config, include_drafts=drafts)
    except MalformedFrontMatterError as exc:
        _report_malformed(exc)
        raise SystemExit(1) from None


def _report_malformed(exc: MalformedFrontMatterError) -> None:
    click.echo(click.style("Malformed front matter:", fg="red", bold=True), err=True)
    click.echo(click.style(f"  File: {exc.source_path}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)


def main():
    """Entry point for the CLI application."""
    cli()
