"""exoserve command group.

Usage:
    exoserve serve --document exercises.pdf
    exoserve extract 12,47 --document exercises.pdf -o out.pdf
    exoserve labels --document exercises.pdf
"""

import click

from exoserve import __version__
from exoserve.cli.commands.extract import extract
from exoserve.cli.commands.labels import labels
from exoserve.cli.commands.serve import serve


@click.group()
@click.version_option(__version__, prog_name="exoserve")
def main() -> None:
    """Serve and extract exercises from a PDF exercise collection."""


main.add_command(serve)
main.add_command(extract)
main.add_command(labels)


if __name__ == "__main__":
    main()
