"""Data models for Scribe replication resources."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..errors import InvalidOptionError


class ReplicationMode(str, Enum):
    """Which side of the replication a command configures."""
    SOURCE = 'source'
    DESTINATION = 'destination'

    @property
    def flag_prefix(self) -> str:
        """Prefix used by the mode-specific flags (``--dest-*`` / ``--source-*``)."""
        return 'dest' if self is ReplicationMode.DESTINATION else 'source'


class CopyMethod(str, Enum):
    """Method of creating a point-in-time image of a volume."""
    NONE = 'None'
    CLONE = 'Clone'
    SNAPSHOT = 'Snapshot'

    @classmethod
    def parse(cls, value: str, flag: str = 'copy-method') -> 'CopyMethod':
        """Match ``value`` case-insensitively against the known copy methods."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise InvalidOptionError(f"unrecognized --{flag}: {value}")


class AccessMode(str, Enum):
    """PersistentVolume access modes accepted by the operator."""
    READ_WRITE_ONCE = 'ReadWriteOnce'
    READ_WRITE_MANY = 'ReadWriteMany'
    READ_ONLY_MANY = 'ReadOnlyMany'

    @classmethod
    def parse(cls, value: str, flag: str = 'access-mode') -> 'AccessMode':
        """Match ``value`` exactly; access modes are case-sensitive."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidOptionError(f"unrecognized --{flag} {value}") from None


class ServiceType(str, Enum):
    """Service type exposing the rsync endpoint."""
    CLUSTER_IP = 'ClusterIP'
    LOAD_BALANCER = 'LoadBalancer'

    @classmethod
    def parse(cls, value: str, flag: str = 'service-type') -> 'ServiceType':
        """Map the accepted spellings to a service type; empty means ClusterIP."""
        if not value:
            return cls.CLUSTER_IP
        try:
            return _SERVICE_TYPE_ALIASES[value]
        except KeyError:
            raise InvalidOptionError(f"unrecognized --{flag} {value}") from None


_SERVICE_TYPE_ALIASES = {
    'ClusterIP': ServiceType.CLUSTER_IP,
    'clusterip': ServiceType.CLUSTER_IP,
    'clusterIP': ServiceType.CLUSTER_IP,
    'LoadBalancer': ServiceType.LOAD_BALANCER,
    'loadbalancer': ServiceType.LOAD_BALANCER,
    'Loadbalancer': ServiceType.LOAD_BALANCER,
}


@dataclass(frozen=True)
class ClusterIdentity:
    """Context, cluster and namespace overrides for one side of a replication."""
    context: Optional[str] = None
    cluster: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class ResourceMeta:
    """Name and namespace of a resource to create."""
    name: str
    namespace: str


@dataclass(frozen=True)
class CommonOptions:
    """Typed options shared by ReplicationSource and ReplicationDestination.

    Optional fields are either ``None`` or non-empty; ``None`` leaves the
    field out of the resource so the operator applies its own default.
    """
    copy_method: CopyMethod
    service_type: ServiceType = ServiceType.CLUSTER_IP
    access_modes: List[AccessMode] = field(default_factory=list)
    capacity: Optional[str] = None
    storage_class_name: Optional[str] = None
    volume_snapshot_class_name: Optional[str] = None
    pvc: Optional[str] = None
    address: Optional[str] = None
    ssh_keys: Optional[str] = None
    ssh_user: Optional[str] = None
    path: Optional[str] = None
    port: Optional[int] = None
    schedule: Optional[str] = None
    provider: Optional[str] = None
    parameters: Dict[str, str] = field(default_factory=dict)
