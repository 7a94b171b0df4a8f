"""Entry point for the termtree command line tool."""

import click

from termtree import __version__
from termtree.cli.commands.show import show
from termtree.cli.commands.xpath import xpath


@click.group()
@click.version_option(version=__version__, prog_name="termtree")
def main() -> None:
    """Inspect term definition trees and their XPath queries.

    Definitions are XML (<mapper> elements) or YAML files describing
    where each field of a document lives.
    """
    pass


main.add_command(show)
main.add_command(xpath)


if __name__ == "__main__":
    main()
