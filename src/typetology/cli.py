"""
typetology CLI

Generates Python bindings for Ontology smart contracts from ABI files.

Usage:
  typetology [--force | -f] [--out | -o DIR] [--input | -i] GLOB

Every file matching GLOB is parsed as an ABI and written to
``DIR/<name>.py`` as a class called ``<name>``. A copy of the runtime
module (``typetology_runtime.py``) is written once into DIR.
"""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import click

from .codegen.generator import CodeGenerator, write_runtime
from .errors import InvalidParameterError, TypetologyError
from .types import parse_abi

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def generate_bindings(pattern: Optional[str], out: Optional[str], force: bool = False) -> List[Path]:
    """
    Generate one binding module per ABI file matching ``pattern``.

    Every input is parsed and every target checked before anything is
    written, so a failure leaves the output directory untouched.

    Args:
        pattern: Glob pattern for ABI files (recursive ``**`` allowed).
        out: Output directory; created if missing.
        force: Overwrite binding modules that already exist.

    Returns:
        Paths of the written binding modules.

    Raises:
        InvalidParameterError: Missing output directory, no matching inputs,
            two inputs with the same file name, or an existing target
            without ``force``.
        AbiParseError: If any input is not a valid ABI.
    """
    if out is None:
        raise InvalidParameterError("Input output directories for generating.")

    matches = sorted(p for p in glob.glob(pattern or "", recursive=True) if Path(p).is_file())
    if not matches:
        raise InvalidParameterError("No input files or no match files for bindings.")

    out_dir = Path(out)
    jobs: List[Tuple[Path, CodeGenerator]] = []
    for abi_file in map(Path, matches):
        target = out_dir / f"{abi_file.stem}.py"
        if any(target == queued for queued, _ in jobs):
            raise InvalidParameterError(f"{abi_file} and another input both generate {target}.")
        if target.exists() and not force:
            raise InvalidParameterError(f"{target} already exists (use --force to overwrite).")
        abi_info = parse_abi(abi_file.read_bytes())
        jobs.append((target, CodeGenerator(abi_file.stem, abi_info)))

    out_dir.mkdir(parents=True, exist_ok=True)
    write_runtime(out_dir)

    written: List[Path] = []
    for target, generator in jobs:
        target.write_text(generator.generate(), encoding="utf-8")
        logger.info("Generated %s", target)
        written.append(target)
    return written


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_glob", required=False)
@click.option("-i", "--input", "input_option", help="Glob pattern of ABI files.")
@click.option("-o", "--out", help="Output directory.")
@click.option("-f", "--force", is_flag=True, help="Overwrite file if exists.")
@click.option("-v", "--verbose", is_flag=True, help="Log each generated file.")
@click.version_option(VERSION, prog_name="typetology")
@click.pass_context
def main(
    ctx: click.Context,
    input_glob: Optional[str],
    input_option: Optional[str],
    out: Optional[str],
    force: bool,
    verbose: bool,
) -> None:
    """Generate typed Python bindings from Ontology contract ABI files."""
    pattern = input_option or input_glob
    if pattern is None and out is None and not force:
        click.echo(ctx.get_help())
        return

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        generate_bindings(pattern, out, force)
    except (TypetologyError, OSError) as e:
        click.echo(str(e))
        ctx.exit(1)

    click.echo("success to generate code!")


if __name__ == "__main__":
    main()
