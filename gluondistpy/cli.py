import sys

import click
import numpy as np

from gluondistpy.config import Config
from gluondistpy.errors import GluonDistributionError
from gluondistpy.tracing import TracingGluonDistribution
from gluondistpy.transform import GridTransformDistribution


@click.group()
def cli() -> None:
    pass


@cli.command()
@click.option(
    "--config",
    required=True,
    type=str,
    help="Specify the path to the config file to be used.",
)
@click.option(
    "--quantity",
    type=click.Choice(["S2", "F"]),
    default="F",
    show_default=True,
    help="Evaluate the position-space dipole S2(r2) or the momentum-space F(q2).",
)
@click.option(
    "--Y",
    "rapidity",
    type=float,
    default=0.0,
    show_default=True,
    help="Rapidity Y = ln(1/x) at which to evaluate.",
)
@click.option("--min", "minimum", type=float, default=1e-2, show_default=True)
@click.option("--max", "maximum", type=float, default=1e2, show_default=True)
@click.option("--points", type=click.IntRange(min=1), default=20, show_default=True)
def evaluate(
    config: str,
    quantity: str,
    rapidity: float,
    minimum: float,
    maximum: float,
    points: int,
) -> None:
    """Print S2 or F on logarithmically spaced points."""
    if not 0 < minimum <= maximum:
        raise click.BadParameter("need 0 < min <= max", param_hint="--min/--max")
    try:
        gdist = Config(config).create_gluon_distribution()
    except GluonDistributionError as exc:
        raise click.ClickException(str(exc)) from exc

    try:
        method = gdist.S2 if quantity == "S2" else gdist.F
        click.echo(f"# {gdist.name()}")
        for value in np.geomspace(minimum, maximum, points):
            click.echo(f"{float(value)!r}\t{method(float(value), rapidity)!r}")
    except GluonDistributionError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        if isinstance(gdist, TracingGluonDistribution):
            gdist.close()


@cli.command("write-grid")
@click.option(
    "--config",
    required=True,
    type=str,
    help="Specify the path to the config file to be used.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="File to write the grid to. Defaults to standard output.",
)
def write_grid(config: str, output: str | None) -> None:
    """Write the momentum grid of a numerically transformed distribution."""
    try:
        gdist = Config(config).create_gluon_distribution()
    except GluonDistributionError as exc:
        raise click.ClickException(str(exc)) from exc

    target = gdist
    if isinstance(gdist, TracingGluonDistribution):
        target = gdist.gdist
        gdist.close()
    if not isinstance(target, GridTransformDistribution):
        raise click.UsageError(
            f"The {target.name()} distribution has no momentum grid to write"
        )

    if output is None:
        target.write_grid(sys.stdout)
    else:
        with open(output, "w") as stream:
            target.write_grid(stream)
