"""CLI command for printing the XPath query of one term."""

import sys

import click

from termtree.config.loader import ConfigLoader
from termtree.lib.errors import (
    ConfigError,
    MalformedDefinitionError,
    TermNotFoundError,
    TermTreeError,
)
from termtree.lib.logging_config import get_logger, setup_logging
from termtree.lib.terminology import Terminology

logger = get_logger(__name__)


@click.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.argument("pointers", nargs=-1, required=True)
@click.option(
    "--constrained",
    is_flag=True,
    help="Print the query with attribute predicates",
)
@click.option(
    "--relative",
    is_flag=True,
    help="Print the query relative to the parent term",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with debug information",
)
def xpath(
    definition: str,
    pointers: tuple[str, ...],
    constrained: bool,
    relative: bool,
    verbose: bool,
) -> None:
    """Print the XPath query for the term at POINTERS in DEFINITION.

    POINTERS are child names leading from the root term, e.g.
    'termtree xpath people.xml person title'.
    """
    setup_logging(verbose=verbose)

    if constrained and relative:
        raise click.UsageError("--constrained and --relative are exclusive")

    try:
        config = ConfigLoader().load_config()
        terminology = Terminology.load(definition, config)
        query = terminology.xpath_for(
            *pointers, constrained=constrained, relative=relative
        )
    except TermNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}", exc_info=True)
        click.echo(f"Configuration Error: {e}", err=True)
        sys.exit(2)
    except MalformedDefinitionError as e:
        logger.error(f"Definition error: {e}", exc_info=True)
        click.echo(f"Definition Error: {e}", err=True)
        sys.exit(3)
    except TermTreeError as e:
        logger.error(f"Error: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(query)
