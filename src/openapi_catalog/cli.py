"""CLI entry point for openapi-catalog."""

import fnmatch
import json
import logging
from pathlib import Path

import click

from openapi_catalog.parser.base import EndpointRecord, ExtractionResult
from openapi_catalog.parser.swagger import parse_contract_file

FORMATS = ["auto", "yaml", "json"]


def _filter_endpoints(endpoints: list[EndpointRecord], patterns: tuple[str, ...]) -> list[EndpointRecord]:
    """Keep endpoints matching any 'METHOD /path' or '/path' glob pattern."""
    if not patterns:
        return list(endpoints)

    result = []
    for ep in endpoints:
        for pattern in patterns:
            method, _, path_glob = pattern.strip().rpartition(" ")
            if method and method.upper() != ep.method:
                continue
            if fnmatch.fnmatchcase(ep.path, path_glob):
                result.append(ep)
                break
    return result


def _extract(doc_path: Path, fmt: str) -> ExtractionResult:
    result = parse_contract_file(doc_path, fmt=fmt)
    if result.degraded:
        click.echo(f"Warning: extraction degraded: {result.error}", err=True)
    return result


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug).")
def main(verbose: int):
    """OpenAPI Catalog — flatten an OpenAPI contract into an endpoint catalogue."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)-5s %(message)s", force=True)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file for the catalogue JSON (default: stdout).")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Contract format.")
@click.option("--endpoint", "patterns", multiple=True, help="Only include endpoints matching 'METHOD /path' or '/path' (globs allowed).")
@click.option("--indent", default=2, type=int, help="JSON indentation.")
def extract(doc_path: Path, output: Path | None, fmt: str, patterns: tuple[str, ...], indent: int):
    """Extract the endpoint catalogue of a contract as JSON."""
    result = _extract(doc_path, fmt)
    endpoints = _filter_endpoints(result.endpoints, patterns)

    payload = json.dumps(
        [ep.model_dump(mode="json", by_alias=True) for ep in endpoints],
        indent=indent,
        ensure_ascii=False,
    )

    if output is None:
        click.echo(payload)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload + "\n", encoding="utf-8")
        click.echo(f"Catalogue of {len(endpoints)} endpoints saved to {output}", err=True)

    if result.degraded:
        raise SystemExit(1)


@main.command(name="list")
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Contract format.")
@click.option("--endpoint", "patterns", multiple=True, help="Only include endpoints matching 'METHOD /path' or '/path' (globs allowed).")
def list_endpoints(doc_path: Path, fmt: str, patterns: tuple[str, ...]):
    """List the endpoints of a contract, one per line."""
    result = _extract(doc_path, fmt)
    endpoints = _filter_endpoints(result.endpoints, patterns)

    for ep in endpoints:
        line = f"{ep.method:<7} {ep.path}"
        if ep.summary:
            line += f"  {ep.summary}"
        click.echo(line)
    click.echo(f"Found {len(endpoints)} endpoints.")

    if result.degraded:
        raise SystemExit(1)
