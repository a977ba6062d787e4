import typer
from . import destination, source, sync_secret

# Create the main app
app = typer.Typer()

# Add subcommands
app.command("new-destination", epilog=destination.EXAMPLES)(destination.new_destination)
app.command("new-source", epilog=source.EXAMPLES)(source.new_source)
app.command("sync-ssh-secret", epilog=sync_secret.EXAMPLES)(sync_secret.sync_ssh_secret)

# Export the app for use in cli.py
__all__ = ['app']
