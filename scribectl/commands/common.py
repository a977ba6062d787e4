"""Options and error handling shared by the scribe subcommands.

Every option defaults to None so that an option the user did not pass can
still be filled in from the config file or a built-in default.
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import typer

from scribectl.config import load_config_file
from scribectl.errors import ScribeError
from scribectl.modules.models import ReplicationMode
from scribectl.modules.options import OptionBundle, resolve_options

logger = logging.getLogger(__name__)


def config_option():
    return typer.Option(None, "--config", help="Path to a YAML file of flag defaults (default './scribe-config.yaml').")


def kubeconfig_option():
    return typer.Option(None, "--kubeconfig", help="Path to the kubeconfig file to use for both clusters.")


def dest_context_option():
    return typer.Option(None, "--dest-kube-context", help="the name of the kubeconfig context to use for the destination cluster.")


def dest_cluster_option():
    return typer.Option(None, "--dest-kube-clustername", help="the name of the kubeconfig cluster to use for the destination.")


def dest_namespace_option():
    return typer.Option(None, "--dest-namespace", help="the namespace of the ReplicationDestination. (default: namespace of the destination context)")


def source_context_option():
    return typer.Option(None, "--source-kube-context", help="the name of the kubeconfig context to use for the source cluster.")


def source_cluster_option():
    return typer.Option(None, "--source-kube-clustername", help="the name of the kubeconfig cluster to use for the source.")


def source_namespace_option():
    return typer.Option(None, "--source-namespace", help="the namespace of the ReplicationSource. (default: namespace of the source context)")


def ssh_keys_secret_option():
    return typer.Option(
        None, "--ssh-keys-secret",
        help="name of an existing valid SSHKeys secret to be used for authentication. If not set, the default "
             "SSHKey secret-name will be used from the ReplicationDestination location "
             "(default 'scribe-rsync-dest-src-<name-of-replication-destination>').",
    )


def address_option():
    return typer.Option(None, "--address", help="the remote address to connect to for replication.")


def port_option():
    return typer.Option(None, "--port", help="SSH port to connect to for replication. (default 22)")


def path_option():
    return typer.Option(None, "--path", help="the remote path to rsync to (default '/')")


def provider_option():
    return typer.Option(None, "--provider", help="name of an external replication provider, if applicable; pass as 'domain.com/provider'")


def provider_parameters_option():
    return typer.Option(
        None, "--provider-parameters",
        help="provider-specific key/value configuration parameters, if using an external provider; "
             "pass as 'key/value,key1/value1,key2/value2'",
    )


def explicit_flags(params: Dict[str, Any]) -> Dict[str, Any]:
    """Turn typer's parameter names back into flag names; --config is not an option value."""
    return {name.replace("_", "-"): value for name, value in params.items() if name != "config"}


def run_command(
    ctx: typer.Context,
    mode: Optional[ReplicationMode],
    action: Callable[[OptionBundle], Any],
) -> Any:
    """Resolve the options of ``ctx`` and run ``action``, reporting failures as one line."""
    try:
        config_path: Optional[Path] = ctx.params.get("config")
        bundle = resolve_options(mode, explicit_flags(ctx.params), load_config_file(config_path))
        return action(bundle)
    except ScribeError as e:
        logger.debug("Command failed", exc_info=True)
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)
