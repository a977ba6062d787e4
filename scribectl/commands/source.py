from pathlib import Path
from typing import Optional

import typer

from scribectl.commands import common
from scribectl.modules import replication
from scribectl.modules.models import ReplicationMode

EXAMPLES = """
Examples:

  # Create a ReplicationSource for mysql-pvc using Snapshot copy method in the namespace 'source'.
  scribe new-source --source-namespace source --source-copy-method Snapshot --source-pvc mysql-pvc --ssh-keys-secret scribe-rsync-dest-src-dest-destination

  # Create a ReplicationSource for mysql-pvc in clustername 'api-source-test-com:6443' with context 'user-scribe'.
  scribe new-source --source-namespace source --source-copy-method Snapshot --source-pvc mysql-pvc --ssh-keys-secret my-keys --source-kube-context user-scribe --source-kube-clustername api-source-test-com:6443

  # Create a ReplicationSource for mysql-pvc using Clone copy method in the current namespace.
  scribe new-source --source-copy-method Clone --source-pvc mysql-pvc --ssh-keys-secret my-keys
"""


def new_source(
    ctx: typer.Context,
    source_copy_method: Optional[str] = typer.Option(None, "--source-copy-method", help="the method of creating a point-in-time image of the source volume; one of 'None|Clone|Snapshot'"),
    source_capacity: Optional[str] = typer.Option(None, "--source-capacity", help="provided to override the capacity of the point-in-Time image."),
    source_storage_class_name: Optional[str] = typer.Option(None, "--source-storage-class-name", help="provided to override the StorageClass of the point-in-Time image."),
    source_access_mode: Optional[str] = typer.Option(None, "--source-access-mode", help="provided to override the accessModes of the point-in-Time image. One of 'ReadWriteOnce|ReadOnlyMany|ReadWriteMany'"),
    source_volume_snapshot_class: Optional[str] = typer.Option(None, "--source-volume-snapshot-class", help="name of the VolumeSnapshotClass to be used for the source volume, only if the copyMethod is 'Snapshot'. If not set, the default VSC will be used."),
    source_pvc: Optional[str] = typer.Option(None, "--source-pvc", help="name of an existing PersistentVolumeClaim (PVC) to replicate."),
    source_cron_spec: Optional[str] = typer.Option(None, "--source-cron-spec", help="cronspec to be used to schedule capturing the state of the source volume. (default '*/3 * * * *')"),
    source_ssh_user: Optional[str] = typer.Option(None, "--source-ssh-user", help="username for outgoing SSH connections (default 'root')"),
    source_service_type: Optional[str] = typer.Option(None, "--source-service-type", help="one of ClusterIP|LoadBalancer. Service type that will be created for incoming SSH connections. (default 'ClusterIP')"),
    source_name: Optional[str] = typer.Option(None, "--source-name", help="name of the ReplicationSource resource (default '<source-namespace>-source')"),
    address: Optional[str] = common.address_option(),
    port: Optional[int] = common.port_option(),
    path: Optional[str] = common.path_option(),
    provider: Optional[str] = common.provider_option(),
    provider_parameters: Optional[str] = common.provider_parameters_option(),
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
    """Create a ReplicationSource for replicating a persistent volume."""
    common.run_command(ctx, ReplicationMode.SOURCE, replication.new_source)
