"""Creation of ReplicationDestination and ReplicationSource resources."""
import logging
from typing import Any, Dict, Optional

from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from ..errors import CreationError, ValidationError
from ..utils.kube import ClusterClient, ClusterClients, build_cluster_clients, unreachable
from .models import CommonOptions, ReplicationMode, ResourceMeta
from .normalize import normalize
from .options import OptionBundle

logger = logging.getLogger(__name__)

GROUP = "scribe.backube"
VERSION = "v1alpha1"
API_VERSION = f"{GROUP}/{VERSION}"

DESTINATION_KIND = "ReplicationDestination"
DESTINATION_PLURAL = "replicationdestinations"
SOURCE_KIND = "ReplicationSource"
SOURCE_PLURAL = "replicationsources"


def validate_options(bundle: OptionBundle) -> None:
    """
    Check that the required option combinations for the bundle's mode are present.

    Raises:
        ValidationError: If a required option or combination is missing.
    """
    prefix = bundle.mode.flag_prefix
    if not bundle.copy_method:
        raise ValidationError(f"must provide --{prefix}-copy-method; one of 'None|Clone|Snapshot'")

    if bundle.mode is ReplicationMode.DESTINATION:
        if not bundle.pvc and not (bundle.capacity and bundle.access_mode):
            raise ValidationError("must either provide --dest-capacity & --dest-access-mode OR --dest-pvc")
        return

    if not bundle.pvc:
        raise ValidationError(
            "must provide --source-pvc; the name of an existing PersistentVolumeClaim to replicate"
        )
    if not bundle.ssh_keys_secret:
        raise ValidationError(
            "must provide the name of the secret in ReplicationSource namespace that holds "
            "the SSHKeys for connecting to the ReplicationDestination namespace"
        )


def resource_meta(bundle: OptionBundle, namespace: str) -> ResourceMeta:
    """Name the resource after --<mode>-name, or '<namespace>-<mode>' by default."""
    name = bundle.name or f"{namespace}-{bundle.mode.value}"
    return ResourceMeta(name=name, namespace=namespace)


def _compact(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset fields so the operator applies its defaults."""
    return {k: v for k, v in fields.items() if v is not None and v != []}


def _volume_options(common: CommonOptions) -> Dict[str, Any]:
    return {
        "copyMethod": common.copy_method.value,
        "capacity": common.capacity,
        "storageClassName": common.storage_class_name,
        "accessModes": [mode.value for mode in common.access_modes],
        "volumeSnapshotClassName": common.volume_snapshot_class_name,
    }


def _transport_options(common: CommonOptions) -> Dict[str, Any]:
    return {
        "sshKeys": common.ssh_keys,
        "sshUser": common.ssh_user,
        "address": common.address,
        "serviceType": common.service_type.value,
        "port": common.port,
        "path": common.path,
    }


def _spec_extras(common: CommonOptions) -> Dict[str, Any]:
    """Trigger and external-provider blocks, each only when configured."""
    extras: Dict[str, Any] = {}
    if common.schedule:
        extras["trigger"] = {"schedule": common.schedule}
    if common.provider:
        extras["external"] = {
            "provider": common.provider,
            "parameters": dict(common.parameters),
        }
    return extras


def build_destination(common: CommonOptions, meta: ResourceMeta) -> Dict[str, Any]:
    """Build the ReplicationDestination object for ``common``."""
    rsync = _volume_options(common)
    rsync["destinationPVC"] = common.pvc
    rsync.update(_transport_options(common))

    spec: Dict[str, Any] = {"rsync": _compact(rsync)}
    spec.update(_spec_extras(common))
    return {
        "apiVersion": API_VERSION,
        "kind": DESTINATION_KIND,
        "metadata": {"name": meta.name, "namespace": meta.namespace},
        "spec": spec,
    }


def build_source(common: CommonOptions, meta: ResourceMeta) -> Dict[str, Any]:
    """Build the ReplicationSource object for ``common``; the source PVC is required."""
    if not common.pvc:
        raise ValidationError("a ReplicationSource requires the name of the PersistentVolumeClaim to replicate")
    rsync = _volume_options(common)
    rsync.update(_transport_options(common))

    spec: Dict[str, Any] = {"sourcePVC": common.pvc, "rsync": _compact(rsync)}
    spec.update(_spec_extras(common))
    return {
        "apiVersion": API_VERSION,
        "kind": SOURCE_KIND,
        "metadata": {"name": meta.name, "namespace": meta.namespace},
        "spec": spec,
    }


def _create(cluster: ClusterClient, plural: str, body: Dict[str, Any]) -> Dict[str, Any]:
    kind = body["kind"]
    name = body["metadata"]["name"]
    namespace = body["metadata"]["namespace"]
    try:
        created = cluster.custom_objects.create_namespaced_custom_object(
            group=GROUP,
            version=VERSION,
            namespace=namespace,
            plural=plural,
            body=body,
        )
    except ApiException as e:
        raise CreationError(
            f"failed to create {kind} {name} in namespace {namespace}: "
            f"{e.status} {e.reason}: {e.body}"
        ) from e
    except HTTPError as e:
        raise unreachable(cluster, f"creating {kind} {name}", e) from e
    logger.info(f"{kind} {name} created in namespace {namespace}")
    return created


def create_replication_destination(cluster: ClusterClient, body: Dict[str, Any]) -> Dict[str, Any]:
    """Submit a ReplicationDestination through the destination cluster's client."""
    return _create(cluster, DESTINATION_PLURAL, body)


def create_replication_source(cluster: ClusterClient, body: Dict[str, Any]) -> Dict[str, Any]:
    """Submit a ReplicationSource through the source cluster's client."""
    return _create(cluster, SOURCE_PLURAL, body)


def new_destination(bundle: OptionBundle, clients: Optional[ClusterClients] = None) -> Dict[str, Any]:
    """Validate, build and create a ReplicationDestination from resolved options."""
    validate_options(bundle)
    common = normalize(bundle)
    if clients is None:
        clients = build_cluster_clients(bundle)
    meta = resource_meta(bundle, clients.destination.namespace)
    logger.debug(f"replication destination {meta.name} will be created in {meta.namespace} namespace")
    return create_replication_destination(clients.destination, build_destination(common, meta))


def new_source(bundle: OptionBundle, clients: Optional[ClusterClients] = None) -> Dict[str, Any]:
    """Validate, build and create a ReplicationSource from resolved options."""
    validate_options(bundle)
    common = normalize(bundle)
    if clients is None:
        clients = build_cluster_clients(bundle)
    meta = resource_meta(bundle, clients.source.namespace)
    logger.debug(f"replication source {meta.name} will be created in {meta.namespace} namespace")
    return create_replication_source(clients.source, build_source(common, meta))
