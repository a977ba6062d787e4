"""Copy the rsync SSH keys Secret from the destination side to the source side."""
import copy
import logging
from typing import Optional

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from ..errors import CreationError, KubeApiError, NotFoundError
from ..utils.kube import ClusterClients, build_cluster_clients, unreachable
from .options import OptionBundle
from .replication import DESTINATION_PLURAL, GROUP, VERSION

logger = logging.getLogger(__name__)

SECRET_PREFIX = "scribe-rsync-dest-src-"


def default_secret_name(destination_name: str) -> str:
    """Name of the Secret the operator generates for a ReplicationDestination."""
    return SECRET_PREFIX + destination_name


def resolve_secret_name(clients: ClusterClients, explicit_name: Optional[str] = None) -> str:
    """
    Return the name of the SSH keys Secret to copy.

    Without an explicit name, the name is derived from the ReplicationDestinations
    in the destination namespace. When there are several, the lexicographically
    smallest name is used.

    Raises:
        NotFoundError: If there is no ReplicationDestination to derive the name from.
        KubeApiError: If listing ReplicationDestinations fails.
        KubeConnectionError: If the destination API server cannot be reached.
    """
    if explicit_name:
        return explicit_name

    destination = clients.destination
    try:
        listing = destination.custom_objects.list_namespaced_custom_object(
            group=GROUP,
            version=VERSION,
            namespace=destination.namespace,
            plural=DESTINATION_PLURAL,
        )
    except ApiException as e:
        raise KubeApiError(
            f"failed to list ReplicationDestinations in namespace {destination.namespace}: "
            f"{e.status} {e.reason}"
        ) from e
    except HTTPError as e:
        raise unreachable(destination, "listing ReplicationDestinations", e) from e

    names = sorted(item["metadata"]["name"] for item in listing.get("items", []))
    if not names:
        raise NotFoundError(
            f"no ReplicationDestination found in namespace {destination.namespace}; "
            "pass --ssh-keys-secret to name the secret"
        )
    if len(names) > 1:
        logger.warning(
            f"Found {len(names)} ReplicationDestinations in namespace {destination.namespace} "
            f"({', '.join(names)}); using {names[0]}. Pass --ssh-keys-secret to choose another."
        )
    return default_secret_name(names[0])


def build_secret_copy(secret: client.V1Secret, namespace: str) -> client.V1Secret:
    """Copy ``secret`` into ``namespace`` with fresh metadata and no owner references."""
    return client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(name=secret.metadata.name, namespace=namespace),
        data=copy.deepcopy(secret.data),
        string_data=copy.deepcopy(secret.string_data),
        type=secret.type,
        immutable=secret.immutable,
    )


def sync_ssh_secret(clients: ClusterClients, secret_name: str) -> client.V1Secret:
    """
    Read the SSH keys Secret on the destination side and create it on the source side.

    An existing Secret with the same name in the source namespace is not
    overwritten; the create fails instead.

    Raises:
        NotFoundError: If the Secret does not exist in the destination namespace.
        KubeApiError: If reading the Secret fails for another reason.
        CreationError: If the source cluster rejects the new Secret.
        KubeConnectionError: If either API server cannot be reached.
    """
    destination, source = clients.destination, clients.source
    try:
        original = destination.core.read_namespaced_secret(name=secret_name, namespace=destination.namespace)
    except ApiException as e:
        if e.status == 404:
            raise NotFoundError(
                f"secret {secret_name} not found in namespace {destination.namespace}"
            ) from e
        raise KubeApiError(
            f"failed to read secret {secret_name} in namespace {destination.namespace}: "
            f"{e.status} {e.reason}"
        ) from e
    except HTTPError as e:
        raise unreachable(destination, f"reading secret {secret_name}", e) from e

    new_secret = build_secret_copy(original, source.namespace)
    try:
        created = source.core.create_namespaced_secret(namespace=source.namespace, body=new_secret)
    except ApiException as e:
        raise CreationError(
            f"failed to create secret {secret_name} in namespace {source.namespace}: "
            f"{e.status} {e.reason}: {e.body}"
        ) from e
    except HTTPError as e:
        raise unreachable(source, f"creating secret {secret_name}", e) from e

    logger.info(f"secret {secret_name} created in namespace {source.namespace}")
    return created


def sync_from_options(bundle: OptionBundle, clients: Optional[ClusterClients] = None) -> client.V1Secret:
    """Resolve both clusters and the secret name from ``bundle``, then copy the Secret."""
    if clients is None:
        clients = build_cluster_clients(bundle)
    secret_name = resolve_secret_name(clients, bundle.ssh_keys_secret or None)
    logger.debug(
        f"copying secret {secret_name} from {clients.destination.context}/{clients.destination.namespace} "
        f"to {clients.source.context}/{clients.source.namespace}"
    )
    return sync_ssh_secret(clients, secret_name)
