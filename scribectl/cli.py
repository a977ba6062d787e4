import logging
import sys

import typer

from scribectl import __version__
from scribectl.commands import app
from scribectl.logging import setup_logging

SCRIBE_LONG = """
Scribe is a command line tool for a scribe operator running in a Kubernetes cluster.
Scribe asynchronously replicates Kubernetes persistent volumes between clusters or namespaces
using rsync, rclone, or restic. Scribe uses a ReplicationDestination and a ReplicationSource
to replicate a volume. Data will be synced according to the configured sync schedule.
"""


def version_callback(value: bool):
    if value:
        typer.echo(f"scribe {__version__}")
        raise typer.Exit()


# Global options callback
@app.callback(help=SCRIBE_LONG, no_args_is_help=True)
def main(
    loglevel: int = typer.Option(0, "--loglevel", "-v", help="Set the level of log output (0-10)"),
    version: bool = typer.Option(False, "--version", callback=version_callback, is_eager=True, help="Show the version and exit"),
):
    """Asynchronously replicate persistent volumes."""
    setup_logging(loglevel)


if __name__ == "__main__":
    try:
        app()
    except Exception as e:
        logging.error(f"Error: {e}")
        sys.exit(1)
