"""Command line entry-point for sieve coreference resolution."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, TextIO

import click

from .conll import render_conll
from .data.loader import load_document
from .errors import CorefError
from .pipeline import CorefSystem
from .utils.config import ConfigManager
from .utils.logging import setup_logging

logger = logging.getLogger("sieve_coref.cli")


def _format_output(chains, system: CorefSystem) -> dict:
    """Format chains for JSON output."""
    output = {
        "chains": [chain.to_dict() for chain in chains.values()],
        "stats": {
            "chains_count": len(chains),
            "mentions_count": sum(len(chain.mentions) for chain in chains.values()),
            "sieves": [sieve.name for sieve in system.sieves],
        },
    }
    if system.trace is not None:
        output["trace"] = system.trace.to_list()
    return output


@click.command()
@click.option("--input", "-i", type=click.File("r"), default="-", help="Document JSON file path (defaults to stdin)")
@click.option("--output", "-o", type=click.File("w"), default="-", help="Output destination (defaults to stdout)")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="YAML configuration file")
@click.option("--sieves", help="Comma-separated sieve names overriding the configuration (required without -rf models)")
@click.option("--conll", is_flag=True, help="Write CoNLL bracket columns instead of JSON")
@click.option("--trace", is_flag=True, help="Include the sieve decision trace in JSON output")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    input: TextIO,
    output: TextIO,
    config_path: Optional[Path],
    sieves: Optional[str],
    conll: bool,
    trace: bool,
    verbose: bool,
) -> None:
    """Resolve coreference in an annotated document.

    The default sieve list ends in the statistical -rf sieves, which need a
    model file under coref.sieve_options. Without trained models, choose rule
    sieves with --sieves or a --config file.
    """

    setup_logging(level="WARNING", verbose=verbose, format_string="%(levelname)s: %(message)s")

    payload = input.read()
    if not payload.strip():
        raise click.ClickException("No document supplied")

    config = ConfigManager(config_path)
    if sieves:
        config.set("coref.sieves", sieves)
    if trace:
        config.set("coref.trace", True)

    try:
        document = load_document(payload)
        system = CorefSystem.from_config(config)
        chains = system.resolve(document)
    except CorefError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        logger.info(f"Resolved {len(chains)} chains in document {document.doc_id}")

    if conll:
        output.write(render_conll(document))
        return

    json.dump(_format_output(chains, system), output, indent=2)
    output.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()
