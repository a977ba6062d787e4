"""Kubernetes client construction for the source and destination clusters.

The source and destination sides are resolved independently from the same
kubeconfig: each side may select its own context and cluster, and each gets
its own ``Configuration`` and ``ApiClient``. The process-wide default
configuration of the kubernetes package is never touched.
"""
import copy
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from ..errors import KubeConnectionError
from ..modules.models import ClusterIdentity
from ..modules.options import OptionBundle

logger = logging.getLogger(__name__)

DEFAULT_KUBECONFIG = "~/.kube/config"
DEFAULT_NAMESPACE = "default"


@dataclass
class ClusterClient:
    """API access for one side of a replication."""
    side: str
    api_client: client.ApiClient
    context: str
    cluster: str
    namespace: str

    @property
    def custom_objects(self) -> client.CustomObjectsApi:
        return client.CustomObjectsApi(self.api_client)

    @property
    def core(self) -> client.CoreV1Api:
        return client.CoreV1Api(self.api_client)

    @property
    def host(self) -> str:
        return self.api_client.configuration.host


@dataclass
class ClusterClients:
    """The two client handles of an invocation."""
    source: ClusterClient
    destination: ClusterClient


def kubeconfig_paths(path: Optional[str] = None) -> List[Path]:
    """
    Return the kubeconfig files to read, in precedence order.

    An explicit path wins, then the entries of $KUBECONFIG, then ~/.kube/config.
    """
    if path:
        return [Path(os.path.expanduser(path))]
    env = os.environ.get("KUBECONFIG")
    if env:
        return [Path(os.path.expanduser(p)) for p in env.split(os.pathsep) if p]
    return [Path(os.path.expanduser(DEFAULT_KUBECONFIG))]


def load_kubeconfig(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Read and merge kubeconfig files into a single dict.

    Named clusters, contexts and users from earlier files win over later ones,
    and the first current-context set is used, as kubectl does.

    Raises:
        KubeConnectionError: If no kubeconfig file can be read.
    """
    merged: Dict[str, Any] = {"clusters": [], "contexts": [], "users": []}
    seen = {"clusters": set(), "contexts": set(), "users": set()}
    found = False

    for kubeconfig in kubeconfig_paths(path):
        if not kubeconfig.is_file():
            if path:
                raise KubeConnectionError(f"Kubeconfig not found: {kubeconfig}")
            continue
        try:
            with open(kubeconfig) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise KubeConnectionError(f"Unable to read kubeconfig {kubeconfig}: {e}") from e
        found = True
        logger.debug(f"Reading kubeconfig {kubeconfig}")

        if not merged.get("current-context") and data.get("current-context"):
            merged["current-context"] = data["current-context"]
        for key in ("clusters", "contexts", "users"):
            for entry in data.get(key) or []:
                name = entry.get("name")
                if name in seen[key]:
                    continue
                seen[key].add(name)
                _resolve_file_references(entry, kubeconfig.parent)
                merged[key].append(entry)

    if not found:
        raise KubeConnectionError(
            f"No kubeconfig found (looked in {', '.join(str(p) for p in kubeconfig_paths(path))})"
        )
    return merged


# Relative paths in a kubeconfig are relative to the file that holds them
_FILE_KEYS = ("certificate-authority", "client-certificate", "client-key", "tokenFile")


def _resolve_file_references(entry: Dict[str, Any], base: Path) -> None:
    for section in ("cluster", "user"):
        spec = entry.get(section)
        if not isinstance(spec, dict):
            continue
        for key in _FILE_KEYS:
            value = spec.get(key)
            if value and not os.path.isabs(os.path.expanduser(value)):
                spec[key] = str(base / value)


def unreachable(cluster: ClusterClient, action: str, error: Exception) -> KubeConnectionError:
    """Describe a transport failure talking to one side's API server."""
    return KubeConnectionError(
        f"cannot reach the {cluster.side} cluster at {cluster.host} while {action}: {error}"
    )


def _find(entries: List[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    return next((e for e in entries if e.get("name") == name), None)


def build_cluster_client(
    side: str,
    identity: ClusterIdentity,
    kubeconfig: Dict[str, Any],
) -> ClusterClient:
    """
    Build the API client for one side of a replication.

    Args:
        side: "source" or "destination", used in messages
        identity: Context, cluster and namespace overrides for this side
        kubeconfig: Merged kubeconfig as returned by load_kubeconfig

    Raises:
        KubeConnectionError: If the context or cluster cannot be resolved or the
            REST configuration cannot be built.
    """
    context_name = identity.context or kubeconfig.get("current-context")
    if not context_name:
        raise KubeConnectionError(
            f"No {side} context: kubeconfig has no current-context and --{_prefix(side)}-kube-context is not set"
        )

    context = _find(kubeconfig.get("contexts", []), context_name)
    if context is None:
        raise KubeConnectionError(f"{side} context {context_name!r} not found in kubeconfig")

    kubeconfig = copy.deepcopy(kubeconfig)
    context = _find(kubeconfig["contexts"], context_name)
    context_spec = context.setdefault("context", {})

    if identity.cluster:
        if _find(kubeconfig.get("clusters", []), identity.cluster) is None:
            raise KubeConnectionError(f"{side} cluster {identity.cluster!r} not found in kubeconfig")
        context_spec["cluster"] = identity.cluster

    configuration = client.Configuration()
    try:
        config.load_kube_config_from_dict(
            kubeconfig,
            context=context_name,
            client_configuration=configuration,
            persist_config=False,
        )
    except (ConfigException, ValueError) as e:
        raise KubeConnectionError(f"Unable to configure {side} client for context {context_name!r}: {e}") from e

    namespace = identity.namespace or context_spec.get("namespace") or DEFAULT_NAMESPACE
    cluster_name = context_spec.get("cluster", "")
    logger.debug(
        f"{side}: context={context_name} cluster={cluster_name} "
        f"host={configuration.host} namespace={namespace}"
    )
    return ClusterClient(
        side=side,
        api_client=client.ApiClient(configuration),
        context=context_name,
        cluster=cluster_name,
        namespace=namespace,
    )


def _prefix(side: str) -> str:
    return "dest" if side == "destination" else "source"


def build_cluster_clients(bundle: OptionBundle) -> ClusterClients:
    """
    Resolve both cluster identities of ``bundle`` to independent clients.

    Both sides are always resolved, even for commands that only write to one
    of them. Without a current-context in the kubeconfig, each side needs its
    own --dest-kube-context / --source-kube-context.

    Raises:
        KubeConnectionError: If either side cannot be resolved.
    """
    kubeconfig = load_kubeconfig(bundle.kubeconfig or None)
    return ClusterClients(
        source=build_cluster_client("source", bundle.source_identity(), kubeconfig),
        destination=build_cluster_client("destination", bundle.destination_identity(), kubeconfig),
    )
