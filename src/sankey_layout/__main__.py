"""CLI entry point for sankey-layout."""

import logging
import sys

import click

from sankey_layout.config import MODES, LayoutConfig
from sankey_layout.errors import SankeyError
from sankey_layout.layout.sankey import SankeyLayout
from sankey_layout.parsers import parse
from sankey_layout.renderers.json_layout import JsonRenderer


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--mode", "-m", "mode", type=click.Choice(MODES), default="basic", help="Vertical positioning mode")
@click.option("--width", "-W", "width", type=float, default=960, help="Canvas width")
@click.option("--height", "-H", "height", type=float, default=500, help="Canvas height")
@click.option("--node-width", "node_width", type=float, default=24, help="Width reserved for each node")
@click.option("--node-padding", "node_padding", type=float, default=8, help="Vertical gap between nodes")
@click.option("--iterations", "-i", "iterations", type=int, default=32, help="Relaxation iterations (optimized mode)")
@click.option("--paths/--no-paths", "paths", default=False, help="Include an SVG path for every link")
@click.option("--curvature", "curvature", type=float, default=0.5, help="Link curvature used with --paths")
@click.option("--indent", "indent", type=int, default=2, help="JSON indentation")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log layout phases to stderr")
def main(
    input: str | None,
    mode: str,
    width: float,
    height: float,
    node_width: float,
    node_padding: float,
    iterations: int,
    paths: bool,
    curvature: float,
    indent: int,
    output: str | None,
    verbose: bool,
) -> None:
    """Sankey diagram layout: JSON nodes and links in, node and link geometry out."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

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
        config = LayoutConfig(
            width=width,
            height=height,
            node_width=node_width,
            node_padding=node_padding,
            iterations=iterations,
            mode=mode,
        )
        graph = parse(text)
        result = SankeyLayout(config).layout(graph)
    except SankeyError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"error: invalid configuration: {e}", err=True)
        sys.exit(1)

    rendered = JsonRenderer(paths=paths, curvature=curvature, indent=indent).render(result)

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
