"""
Output Printer.

Renders API records to stdout as a Rich table, JSON or YAML.
Nothing else is written to stdout, so JSON/YAML output can be piped
straight into another tool.
"""

import json
from collections.abc import Sequence
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.table import Table

from pivnet.api.models import Product, Release
from pivnet.cli.state import OutputFormat

PRODUCT_COLUMNS = [("ID", "id"), ("Slug", "slug"), ("Name", "name")]
RELEASE_COLUMNS = [
    ("ID", "id"),
    ("Version", "version"),
    ("Release Type", "release_type"),
    ("Release Date", "release_date"),
    ("Description", "description"),
]


class Printer:
    """Prints records in the format selected with --format."""

    def __init__(self, output_format: OutputFormat, console: Console | None = None) -> None:
        self.output_format = output_format
        self._console = console

    @property
    def console(self) -> Console:
        # Created lazily so that CliRunner's stdout capture is picked up
        if self._console is None:
            self._console = Console()
        return self._console

    def print_products(self, products: Sequence[Product]) -> None:
        self._print_many("Products", PRODUCT_COLUMNS, [p.to_output() for p in products])

    def print_product(self, product: Product) -> None:
        self._print_one("Product", PRODUCT_COLUMNS, product.to_output())

    def print_releases(self, releases: Sequence[Release]) -> None:
        self._print_many("Releases", RELEASE_COLUMNS, [r.to_output() for r in releases])

    def print_release(self, release: Release) -> None:
        self._print_one("Release", RELEASE_COLUMNS, release.to_output())

    def _print_one(self, title: str, columns: list[tuple[str, str]], record: dict[str, Any]) -> None:
        if self.output_format == OutputFormat.TABLE:
            self._print_table(title, columns, [record])
        else:
            self._print_data(record)

    def _print_many(self, title: str, columns: list[tuple[str, str]], records: list[dict[str, Any]]) -> None:
        if self.output_format == OutputFormat.TABLE:
            self._print_table(title, columns, records)
        else:
            self._print_data(records)

    def _print_data(self, data: Any) -> None:
        if self.output_format == OutputFormat.JSON:
            typer.echo(json.dumps(data, indent=2))
        else:
            typer.echo(yaml.safe_dump(data, sort_keys=False), nl=False)

    def _print_table(self, title: str, columns: list[tuple[str, str]], records: list[dict[str, Any]]) -> None:
        table = Table(title=title, show_header=True)
        for header, _ in columns:
            table.add_column(header, style="cyan" if header == "ID" else None)

        for record in records:
            table.add_row(*(str(record.get(key, "")) for _, key in columns))

        self.console.print(table)
