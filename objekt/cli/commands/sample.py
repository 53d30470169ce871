"""Sample command for printing random values of one domain."""

import logging

import typer
from pydantic import ValidationError

from ...config import get_config
from ...core.errors import ObjektError
from ...core.models.random_config import Domain, coerce_directives
from ...randoms import ObjektRandom
from ..app import app, console, get_json_mode
from ..utils import Output, ExitCode

logger = logging.getLogger(__name__)

EXTRA_DOMAINS = ("string", "uuid")


def _parse_between(raw: str) -> list[str]:
    """Split 'LO..HI' into its two bounds."""
    lower, sep, upper = raw.partition("..")
    if not sep or not lower or not upper:
        raise ValueError(f"Expected LO..HI, got {raw!r}")
    return [lower, upper]


def _directives(
    exactly: str | None,
    between: str | None,
    one_of: list[str] | None,
) -> dict:
    raw: dict = {}
    if exactly is not None:
        raw["exactly"] = exactly
    if between is not None:
        raw["between"] = _parse_between(between)
    if one_of:
        raw["one_of"] = one_of
    return raw


@app.command("sample")
def sample_command(
    domain: str = typer.Argument(
        ...,
        help="Value domain (integer, float, date, instant, char, string, uuid, ...)",
    ),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of values"),
    exactly: str | None = typer.Option(
        None, "--exactly", help="Always produce this value"
    ),
    between: str | None = typer.Option(
        None,
        "--between",
        help="Bounds as LO..HI (upper bound exclusive for floats and datetimes)",
    ),
    one_of: list[str] | None = typer.Option(
        None, "--one-of", help="Candidate value (repeatable)"
    ),
    chars: str | None = typer.Option(
        None, "--chars", help="Characters for the string domain"
    ),
    seed: int | None = typer.Option(
        None, "--seed", help="Random seed for reproducibility"
    ),
):
    """
    Print random values drawn from one domain.

    Values given to --exactly, --between and --one-of are parsed as the
    domain's type (ISO-8601 for temporal domains). At most one of them
    may be given. For the string domain they describe the length.

    EXIT CODES:
        0 = Success
        1 = Validation error

    Examples:
        objekt sample integer -n 5 --between 1..6
        objekt sample char --one-of abc
        objekt sample date --between 2024-01-01..2024-12-31 --seed 7
        objekt sample string --exactly 8 --chars 01
    """
    out = Output(console=console, json_mode=get_json_mode())
    name = domain.lower()

    if name not in EXTRA_DOMAINS and name not in {d.value for d in Domain}:
        out.error(
            f"Unknown domain: {domain}",
            suggestion="Choose one of: "
            + ", ".join([d.value for d in Domain] + list(EXTRA_DOMAINS)),
        )
        raise typer.Exit(out.finish())

    try:
        raw = _directives(exactly, between, one_of)
    except ValueError as e:
        out.error(str(e), suggestion="Example: --between 1..6")
        raise typer.Exit(out.finish())

    if chars is not None and name != "string":
        out.error("--chars only applies to the string domain")
        raise typer.Exit(out.finish())
    if name == "uuid" and raw:
        out.error("The uuid domain takes no pool options")
        raise typer.Exit(out.finish())

    settings = get_config()
    rand = ObjektRandom(
        settings.random_config(),
        seed=seed if seed is not None else settings.seed,
    )

    try:
        if name == "uuid":
            values = [rand.uuid() for _ in range(count)]
        elif name == "string":
            length = coerce_directives(Domain.STRING_LENGTH, raw)
            values = [rand.string(length, chars) for _ in range(count)]
        else:
            target = Domain(name)
            if target is Domain.CHAR and "one_of" in raw:
                raw["one_of"] = "".join(raw["one_of"])
            spec = coerce_directives(target, raw)
            values = [rand.sample(target, spec) for _ in range(count)]
    except ValidationError as e:
        out.error(
            f"Invalid value for {name}: {e.errors()[0]['msg']}",
            exit_code=ExitCode.VALIDATION_ERROR,
        )
        raise typer.Exit(out.finish())
    except (ObjektError, ValueError) as e:
        out.error(str(e), exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())

    logger.info("Sampled %d %s value(s)", count, name)

    if out.json_mode:
        out.set_data("domain", name)
        out.set_data("samples", values)
    else:
        for value in values:
            console.print(str(value), markup=False, highlight=False)

    raise typer.Exit(out.finish())
