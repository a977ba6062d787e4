from pathlib import Path
from typing import Optional

import typer

from scribectl.commands import common
from scribectl.modules import ssh_secret

EXAMPLES = """
Examples:

  # Copy the SSH secret from namespace 'dest' to namespace 'source'.
  scribe sync-ssh-secret --dest-namespace dest --source-namespace source

  # Copy the SSH secret from context 'kind-kind' namespace 'dest' to context 'admin'
  # clustername 'api-test-com:6443' namespace 'source'.
  scribe sync-ssh-secret --dest-namespace dest --source-namespace source --dest-kube-context kind-kind --source-kube-context admin --source-kube-clustername api-test-com:6443
"""


def sync_ssh_secret(
    ctx: typer.Context,
    ssh_keys_secret: Optional[str] = common.ssh_keys_secret_option(),
    kubeconfig: Optional[str] = common.kubeconfig_option(),
    dest_kube_context: Optional[str] = common.dest_context_option(),
    dest_kube_clustername: Optional[str] = common.dest_cluster_option(),
    dest_namespace: Optional[str] = common.dest_namespace_option(),
    source_kube_context: Optional[str] = common.source_context_option(),
    source_kube_clustername: Optional[str] = common.source_cluster_option(),
    source_namespace: Optional[str] = common.source_namespace_option(),
    config: Optional[Path] = common.config_option(),
):
    """Copy the SSH secret for rsync between namespaces and/or clusters."""
    common.run_command(ctx, None, ssh_secret.sync_from_options)
