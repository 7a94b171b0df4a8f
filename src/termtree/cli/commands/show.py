"""CLI command for listing the terms of a definition.

Implements the 'termtree show' command, which loads a definition file and
prints every term with its derived XPath queries.
"""

import json
import sys

import click

from termtree.config.loader import ConfigLoader
from termtree.lib.errors import ConfigError, MalformedDefinitionError, TermTreeError
from termtree.lib.logging_config import get_logger, setup_logging
from termtree.lib.terminology import Terminology
from termtree.models.term import Term

logger = get_logger(__name__)


@click.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output the tree as JSON")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with debug information",
)
@click.option("--quiet", "-q", is_flag=True, help="Only report errors")
def show(definition: str, as_json: bool, verbose: bool, quiet: bool) -> None:
    """Print every term of DEFINITION with its XPath queries.

    DEFINITION is the path to an XML or YAML definition file.
    """
    setup_logging(verbose=verbose, quiet=quiet)
    logger.info(f"Show command invoked: definition={definition}")

    try:
        config = ConfigLoader().load_config()
        terminology = Terminology.load(definition, config)
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

    if as_json:
        click.echo(json.dumps(terminology.to_dict(), indent=2))
        return

    _echo_term(terminology.root, depth=0)


def _echo_term(term: Term, depth: int) -> None:
    indent = "  " * depth
    flag = " (required)" if term.required else ""
    click.echo(f"{indent}{term.name} [{term.data_type}]{flag}")
    click.echo(f"{indent}  xpath:       {term.xpath}")
    if term.xpath_constrained != term.xpath:
        click.echo(f"{indent}  constrained: {term.xpath_constrained}")
    click.echo(f"{indent}  relative:    {term.xpath_relative}")
    for child in term.children.values():
        _echo_term(child, depth + 1)
