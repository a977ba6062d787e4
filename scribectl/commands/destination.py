from pathlib import Path
from typing import Optional

import typer

from scribectl.commands import common
from scribectl.modules import replication
from scribectl.modules.models import ReplicationMode

EXAMPLES = """
Examples:

  # Create a ReplicationDestination in the namespace 'dest'.
  scribe new-destination --dest-namespace dest --dest-copy-method Snapshot --dest-access-mode ReadWriteOnce

  # Create a ReplicationDestination in the current namespace that will use Snapshot copy method and existing pvc mysql-claim
  scribe new-destination --dest-copy-method Snapshot --dest-pvc mysql-claim

  # Create a ReplicationDestination in the namespace 'dest' in cluster 'api-test-test-com:6443' with context 'scribe-user'.
  scribe new-destination --dest-namespace dest --dest-copy-method Snapshot --dest-access-mode ReadWriteOnce --dest-kube-context scribe-user --dest-kube-clustername api-test-test-com:6443
"""


def new_destination(
    ctx: typer.Context,
    dest_copy_method: Optional[str] = typer.Option(None, "--dest-copy-method", help="the method of creating a point-in-time image of the destination volume; one of 'None|Clone|Snapshot'"),
    dest_capacity: Optional[str] = typer.Option(None, "--dest-capacity", help="Size of the destination volume to create. Must be provided if --dest-pvc is not provided. (default '2Gi')"),
    dest_storage_class_name: Optional[str] = typer.Option(None, "--dest-storage-class-name", help="name of the StorageClass of the destination volume. If not set, the default StorageClass will be used."),
    dest_access_mode: Optional[str] = typer.Option(None, "--dest-access-mode", help="the access modes for the destination volume. Must be provided if --dest-pvc is not provided; One of 'ReadWriteOnce|ReadOnlyMany|ReadWriteMany'"),
    dest_volume_snapshot_class: Optional[str] = typer.Option(None, "--dest-volume-snapshot-class", help="name of the VolumeSnapshotClass to be used for the destination volume, only if the copyMethod is 'Snapshot'. If not set, the default VSC will be used."),
    dest_pvc: Optional[str] = typer.Option(None, "--dest-pvc", help="name of an existing PVC to use as the transfer destination volume instead of automatically provisioning one."),
    dest_cron_spec: Optional[str] = typer.Option(None, "--dest-cron-spec", help="cronspec to be used to schedule replication to occur at regular, time-based intervals. If not set replication will be continuous."),
    dest_ssh_user: Optional[str] = typer.Option(None, "--dest-ssh-user", help="username for outgoing SSH connections (default 'root')"),
    dest_service_type: Optional[str] = typer.Option(None, "--dest-service-type", help="one of ClusterIP|LoadBalancer. Service type to be created for incoming SSH connections. (default 'ClusterIP')"),
    dest_name: Optional[str] = typer.Option(None, "--dest-name", help="name of the ReplicationDestination resource. (default '<dest-namespace>-destination')"),
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
    """Create a ReplicationDestination for replicating a persistent volume."""
    common.run_command(ctx, ReplicationMode.DESTINATION, replication.new_destination)
