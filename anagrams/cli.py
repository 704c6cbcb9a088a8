"""Command-line driver for anagram files."""

import logging
import time
from pathlib import Path
from typing import Optional

import typer
from tqdm import tqdm

from anagrams.anagrams_core import Anagram
from anagrams.config import DEFAULT_LIMITS, LEGACY_LIMITS, Limits
from anagrams.errors import AnagramError, NotFound
from anagrams.permute import arrangement_count

app = typer.Typer(help="Generate, verify and search string permutations")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _limits(legacy: bool) -> Limits:
    return LEGACY_LIMITS if legacy else DEFAULT_LIMITS


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def _generate_with_progress(store: Anagram, quiet: bool) -> None:
    total = arrangement_count(store.source_string)
    with tqdm(
        total=total,
        initial=store.permutation_count,
        unit="perm",
        disable=quiet,
    ) as pbar:
        def advance(sequence: int, permutation: str) -> bool:
            pbar.update(sequence - pbar.n)
            return True

        store.generate(advance)
        pbar.update(store.permutation_count - pbar.n)


def _integrity_test(store: Anagram, step: int) -> None:
    typer.echo(f"{step}. Performing integrity test...")
    if store.permutation_count < 2:
        typer.echo("\tSkipped: fewer than 2 permutations.\n")
        return
    started = time.perf_counter()
    store.test()
    elapsed = time.perf_counter() - started
    typer.echo(
        f"\tIntegrity test successfully performed on "
        f"{store.permutation_count} permutations in {elapsed:.4f} seconds.\n"
    )


def write_report(store: Anagram, path: Path) -> int:
    """Write the current result set to ``path``; return the line count."""
    source = store.source_string
    with open(path, "w", encoding="utf-8", errors="surrogatepass") as f:
        f.write(
            f'Anagram: "{source}" ({store.element_count} elements, '
            f"{store.record_width} bytes), "
            f"Permutations: {store.permutation_count}\n"
            f'Filter: "{store.term}", Matches: {store.count}\n\n'
        )
        written = 0
        for written, permutation in enumerate(store, start=1):
            f.write(f"{written:07d}. {permutation}\n")
    return written


@app.command()
def run(
    source: str = typer.Argument(..., help="String to permute"),
    term: Optional[str] = typer.Argument(None, help="Prefix to filter by"),
    directory: Path = typer.Option(Path("."), help="Where files are written"),
    legacy_limits: bool = typer.Option(
        False, "--legacy-limits", help="Use 16-bit platform element limits"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No progress bar"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Open or build SOURCE.anagram, verify it and dump it to SOURCE.txt."""
    _configure_logging(verbose)
    limits = _limits(legacy_limits)
    path = directory / f"{source}.anagram"
    step = 1
    try:
        typer.echo(f'{step}. Opening anagram file "{path}"...')
        step += 1
        try:
            store = Anagram.open(path, limits)
        except NotFound:
            typer.echo("\tAnagram file not found!\n")
            typer.echo(f'{step}. Initializing anagram file "{path}"...')
            step += 1
            store = Anagram.create(path, source, limits)
            typer.echo(
                f'\tAnagram file successfully initialized with string "{source}".\n'
            )
        else:
            typer.echo(
                f'\tAnagram file with source string "{store.source_string}" '
                f"successfully opened.\n"
            )

        with store:
            if not store.is_complete:
                typer.echo(f"{step}. Generating permutations...")
                step += 1
                started = time.perf_counter()
                _generate_with_progress(store, quiet)
                elapsed = time.perf_counter() - started
                typer.echo(
                    f"\t{store.permutation_count} permutations successfully "
                    f"generated in {elapsed:.4f} seconds.\n"
                )

            _integrity_test(store, step)
            step += 1

            if term:
                typer.echo(
                    f'{step}. Filtering permutation list using term "{term}"...'
                )
                step += 1
                started = time.perf_counter()
                matches = store.filter(term)
                elapsed = time.perf_counter() - started
                typer.echo(
                    f"\t{matches} permutations selected out of "
                    f"{store.permutation_count} in {elapsed:.4f} seconds.\n"
                )

            report = directory / f"{store.source_string}.txt"
            typer.echo(f'{step}. Generating "{report}" text file...')
            started = time.perf_counter()
            written = write_report(store, report)
            elapsed = time.perf_counter() - started
            typer.echo(
                f"\t{written} permutations written to text file in "
                f"{elapsed:.4f} seconds.\n"
            )

            if term:
                selected = store.count
                restored = store.filter(None)
                typer.echo(
                    f"...Result reset from {selected} to {restored} permutations.\n"
                )
    except AnagramError as e:
        _fail(str(e))
    typer.secho("Good-Bye!", fg=typer.colors.GREEN)


@app.command()
def info(
    path: Path = typer.Argument(..., help="Anagram file"),
    legacy_limits: bool = typer.Option(False, "--legacy-limits"),
) -> None:
    """Show what an anagram file holds."""
    try:
        with Anagram.open(path, _limits(legacy_limits)) as store:
            typer.echo(f"Source:       {store.source_string}")
            typer.echo(f"Elements:     {store.element_count}")
            typer.echo(f"Bytes:        {store.record_width}")
            typer.echo(f"Permutations: {store.permutation_count}")
            typer.echo(f"Complete:     {'yes' if store.is_complete else 'no'}")
    except AnagramError as e:
        _fail(str(e))


@app.command()
def generate(
    path: Path = typer.Argument(..., help="Anagram file"),
    limit: Optional[int] = typer.Option(
        None, help="Stop after this many new permutations"
    ),
    legacy_limits: bool = typer.Option(False, "--legacy-limits"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Resume generation of an existing anagram file."""
    _configure_logging(verbose)
    try:
        with Anagram.open(path, _limits(legacy_limits)) as store:
            start = store.permutation_count
            store.generate(limit=limit)
            state = "complete" if store.is_complete else "incomplete"
            typer.echo(
                f"{store.permutation_count - start} permutations added, "
                f"{store.permutation_count} total ({state})"
            )
    except AnagramError as e:
        _fail(str(e))


if __name__ == "__main__":
    app()
