"""Command line front end: ``phc-scrypt hash|verify|identifiers|bench``."""
import asyncio
import logging
import time
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from . import hashing
from .errors import ScryptHashError
from .params import DEFAULTS, HashOptions

load_dotenv()

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="scrypt password hashing (PHC string format).")


@app.callback()
def main(verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _run(coro):
    try:
        return asyncio.run(coro)
    except ScryptHashError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2)


@app.command("hash")
def hash_command(
    password: Annotated[Optional[str], typer.Argument(help="Password; prompted when omitted.")] = None,
    cost: Annotated[int, typer.Option(envvar="PHC_SCRYPT_COST", help="Cost exponent (N = 2**cost).")] = DEFAULTS.cost,
    blocksize: Annotated[int, typer.Option(envvar="PHC_SCRYPT_BLOCKSIZE", help="Block size factor r.")] = DEFAULTS.blocksize,
    parallelism: Annotated[int, typer.Option(envvar="PHC_SCRYPT_PARALLELISM", help="Parallelism p.")] = DEFAULTS.parallelism,
    salt_size: Annotated[int, typer.Option(envvar="PHC_SCRYPT_SALT_SIZE", help="Salt length in bytes.")] = DEFAULTS.salt_size,
) -> None:
    """Hash a password and print the PHC string."""
    if password is None:
        password = typer.prompt("Password", hide_input=True, confirmation_prompt=True)
    options = HashOptions(cost=cost, blocksize=blocksize, parallelism=parallelism, salt_size=salt_size)
    typer.echo(_run(hashing.hash(password, options)))


@app.command("verify")
def verify_command(
    encoded: Annotated[str, typer.Argument(help="PHC string produced by 'hash'.")],
    password: Annotated[Optional[str], typer.Argument(help="Password; prompted when omitted.")] = None,
) -> None:
    """Check a password against a PHC string. Exit code 1 on mismatch."""
    if password is None:
        password = typer.prompt("Password", hide_input=True)
    if _run(hashing.verify(encoded, password)):
        typer.echo("match")
    else:
        typer.echo("mismatch")
        raise typer.Exit(code=1)


@app.command("identifiers")
def identifiers_command() -> None:
    for ident in hashing.identifiers():
        typer.echo(ident)


@app.command("bench")
def bench_command(
    min_cost: Annotated[int, typer.Option(help="Lowest cost exponent.")] = 10,
    max_cost: Annotated[int, typer.Option(help="Highest cost exponent.")] = DEFAULTS.cost,
    rounds: Annotated[int, typer.Option(min=1, help="Hash/verify pairs per cost.")] = 3,
    password: Annotated[str, typer.Option(help="Password to hash.")] = "correct horse battery staple",
) -> None:
    """Time hash and verify for a range of cost exponents."""

    async def measure(cost: int) -> tuple[float, float]:
        hash_time = verify_time = 0.0
        for _ in range(rounds):
            start = time.perf_counter()
            encoded = await hashing.hash(password, cost=cost)
            hash_time += time.perf_counter() - start
            start = time.perf_counter()
            await hashing.verify(encoded, password)
            verify_time += time.perf_counter() - start
        return hash_time / rounds, verify_time / rounds

    typer.echo(f"{'ln':>4} {'hash ms':>10} {'verify ms':>10}")
    for cost in range(min_cost, max_cost + 1):
        logger.debug("bench ln=%d rounds=%d", cost, rounds)
        hash_time, verify_time = _run(measure(cost))
        typer.echo(f"{cost:>4} {hash_time * 1000:>10.1f} {verify_time * 1000:>10.1f}")
