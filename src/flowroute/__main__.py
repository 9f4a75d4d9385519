"""CLI entry point for flowroute."""

import logging
import sys

import click

from flowroute.config import parse_direction
from flowroute.layout.engine import build
from flowroute.parsers import parse
from flowroute.renderers.json_model import JsonRenderer


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option(
    "--direction",
    "-d",
    "direction",
    type=click.Choice(["vertical", "horizontal"], case_sensitive=False),
    default=None,
    help="Override the auto-layout direction",
)
@click.option("--grid-size", "-g", "grid_size", type=click.FloatRange(min=0, min_open=True), default=None, help="Override the routing grid cell size (px)")
@click.option("--indent", "indent", type=click.IntRange(min=0), default=2, help="JSON indentation (0 for compact)")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log routing decisions to stderr")
def main(
    input: str | None,
    output: str | None,
    direction: str | None,
    grid_size: float | None,
    indent: int,
    verbose: bool,
) -> None:
    """Flowchart diagram JSON to routed render model JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        doc = parse(text)
        config = doc.config.with_overrides(
            layout_direction=parse_direction(direction) if direction else None,
            grid_size=grid_size,
        )
        model = build(doc.diagram, config)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    rendered = JsonRenderer(indent=indent or None).render(model)

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
