"""
avm1c - AVM1 Block Translator Command-Line Interface
====================================================

This module implements the command-line interface for the AVM1 block
translator. It reads a control-flow graph document (JSON, as written by
an AVM1 bytecode parser), translates the head block and prints the
resulting op listing.

Usage Examples
--------------
Translate a block:
    $ avm1c frame1.json

Write JSON instead of a listing:
    $ avm1c frame1.json --json -o frame1.ops.json

Fail instead of stopping early on dynamic operands:
    $ avm1c frame1.json --strict

Show the input actions before the ops:
    $ avm1c frame1.json --actions

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from pathlib import Path
from typing import Optional
import json
import logging

import click

from avm1_sdk import __version__
from avm1_sdk.cfg import load_cfg_file
from avm1_sdk.cli.errors import ExitCode, handle_cli_exception
from avm1_sdk.compiler import compile_cfg
from avm1_sdk.config import TranslatorConfig

# Logger for this module
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Write the ops as JSON instead of a text listing",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on operands that cannot be resolved statically (also enabled by AVM1_STRICT=1)",
)
@click.option(
    "--actions",
    "show_actions",
    is_flag=True,
    help="Include the input actions of the head block before the ops",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="avm1c")
def main(
    input_file: Path,
    output: Optional[Path],
    as_json: bool,
    strict: bool,
    show_actions: bool,
    verbose: bool,
) -> None:
    """
    Translate an AVM1 block into a flat op listing.

    INPUT_FILE is a JSON control-flow graph document. Only its head block
    is translated.

    Examples:

        # Print the op listing
        avm1c frame1.json

        # JSON output to a file
        avm1c frame1.json --json -o frame1.ops.json
    """
    setup_logging(verbose)

    config = TranslatorConfig.from_env()
    if strict:
        config.strict = True

    try:
        cfg = load_cfg_file(input_file)
        code = compile_cfg(cfg, config)
    except Exception as e:
        handle_cli_exception(e, verbose, error_type="Translation")

    if verbose:
        click.echo(f"Input file: {input_file} ({len(cfg.blocks)} block(s))", err=True)

    # Build output
    if as_json:
        result = json.dumps(code.to_dict(), indent=2) + "\n"
    else:
        output_lines = [f"; Translation of {input_file.name}"]
        output_lines.append(f"; Head block: {cfg.head.label!r} ({len(cfg.head.actions)} actions)")
        output_lines.append(f"; Flow: {cfg.head.flow}")
        output_lines.append("")

        if show_actions:
            output_lines.append("; Actions:")
            for i, action in enumerate(cfg.head.actions):
                output_lines.append(f";   #{i:<3} {action}")
            output_lines.append("")

        if code.ops or code.bailout:
            output_lines.append(code.to_text())
        else:
            output_lines.append("; (no ops)")
        result = "\n".join(output_lines) + "\n"

    # Write output
    if output:
        try:
            output.write_text(result, encoding="utf-8")
            if verbose:
                click.echo(f"Output written to: {output}", err=True)
        except OSError as e:
            click.echo(f"Error writing {output}: {e}", err=True)
            raise SystemExit(ExitCode.BUILD_ERROR)
    else:
        click.echo(result, nl=False)

    if verbose:
        click.echo(f"Ops emitted: {len(code)}", err=True)
        if code.bailout:
            click.echo(f"Stopped early: {code.bailout}", err=True)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
