"""Demo command: short strings from a custom RandomConfig."""

import typer

from ...core.models.random_config import RandomConfig
from ...randoms import ObjektRandom
from ..app import app, console, get_json_mode
from ..utils import Output

DEMO_COUNT = 20


@app.command("demo")
def demo_command(
    seed: int | None = typer.Option(
        None, "--seed", help="Random seed for reproducibility"
    ),
):
    """
    Print twenty strings of length 2-3 over the letters a-e.

    Example:
        objekt demo --seed 1
    """
    out = Output(console=console, json_mode=get_json_mode())

    config = (
        RandomConfig.builder()
        .string_length(between=(2, 3))
        .char(one_of="abcde")
        .build()
    )
    rand = ObjektRandom(config, seed=seed)
    values = [rand.string() for _ in range(DEMO_COUNT)]

    if out.json_mode:
        out.set_data("samples", values)
    else:
        for value in values:
            console.print(value, markup=False, highlight=False)

    raise typer.Exit(out.finish())
