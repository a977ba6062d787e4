"""Option resolution for scribe commands.

Each option is resolved from the following sources, highest precedence first:
1. Flags the user passed on the command line
2. Values from the scribe config file, keyed by flag name
3. Built-in defaults
"""
import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigError
from .models import ClusterIdentity, ReplicationMode

logger = logging.getLogger(__name__)

# Flags understood by every command, mapped to OptionBundle fields
IDENTITY_FLAGS = {
    "kubeconfig": "kubeconfig",
    "dest-kube-context": "dest_kube_context",
    "dest-kube-clustername": "dest_kube_clustername",
    "dest-namespace": "dest_namespace",
    "source-kube-context": "source_kube_context",
    "source-kube-clustername": "source_kube_clustername",
    "source-namespace": "source_namespace",
    "ssh-keys-secret": "ssh_keys_secret",
}

# Flags shared by new-destination and new-source
REPLICATION_FLAGS = {
    "address": "address",
    "port": "port",
    "path": "path",
    "provider": "provider",
    "provider-parameters": "provider_parameters",
}

# Per-mode flags; the field names are the same for both modes
MODE_FIELDS = {
    "copy-method": "copy_method",
    "capacity": "capacity",
    "access-mode": "access_mode",
    "storage-class-name": "storage_class_name",
    "volume-snapshot-class": "volume_snapshot_class_name",
    "pvc": "pvc",
    "cron-spec": "schedule",
    "ssh-user": "ssh_user",
    "service-type": "service_type",
    "name": "name",
}

DEFAULTS = {
    ReplicationMode.DESTINATION: {"dest-capacity": "2Gi"},
    ReplicationMode.SOURCE: {"source-cron-spec": "*/3 * * * *"},
}

_STRING_FIELDS = (
    "copy_method", "capacity", "access_mode", "storage_class_name",
    "volume_snapshot_class_name", "pvc", "schedule", "ssh_user",
    "ssh_keys_secret", "service_type", "address", "path", "provider",
    "provider_parameters", "name", "kubeconfig", "dest_kube_context",
    "dest_kube_clustername", "dest_namespace", "source_kube_context",
    "source_kube_clustername", "source_namespace",
)


class OptionBundle(BaseModel):
    """Fully resolved, read-only options for one invocation."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Optional[ReplicationMode] = Field(
        default=None,
        description="Side being configured; None for commands that touch both"
    )
    copy_method: str = Field(default="", description="None|Clone|Snapshot")
    capacity: str = Field(default="", description="Volume size as a quantity, e.g. 2Gi")
    access_mode: str = Field(default="", description="ReadWriteOnce|ReadWriteMany|ReadOnlyMany")
    storage_class_name: str = Field(default="", description="StorageClass of the volume")
    volume_snapshot_class_name: str = Field(default="", description="VolumeSnapshotClass for Snapshot copies")
    pvc: str = Field(default="", description="Existing PersistentVolumeClaim")
    schedule: str = Field(default="", description="Cron schedule; empty means continuous")
    ssh_user: str = Field(default="", description="User for SSH connections")
    ssh_keys_secret: str = Field(default="", description="Secret holding the rsync SSH keys")
    service_type: str = Field(default="", description="ClusterIP|LoadBalancer")
    address: str = Field(default="", description="Remote address to replicate with")
    port: Optional[int] = Field(default=None, description="SSH port")
    path: str = Field(default="", description="Remote path to rsync to")
    provider: str = Field(default="", description="External replication provider")
    provider_parameters: str = Field(default="", description="key/value,key1/value1 provider parameters")
    name: str = Field(default="", description="Name of the resource to create")
    kubeconfig: str = Field(default="", description="Path to the kubeconfig file")
    dest_kube_context: str = Field(default="", description="Destination kubeconfig context")
    dest_kube_clustername: str = Field(default="", description="Destination cluster name")
    dest_namespace: str = Field(default="", description="Destination namespace")
    source_kube_context: str = Field(default="", description="Source kubeconfig context")
    source_kube_clustername: str = Field(default="", description="Source cluster name")
    source_namespace: str = Field(default="", description="Source namespace")

    @field_validator(*_STRING_FIELDS, mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        """Config files may hold numbers where flags hold strings."""
        if value is None:
            return ""
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("port", mode="before")
    @classmethod
    def _empty_port(cls, value: Any) -> Any:
        if value == "" or value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("port must be an integer")
        return value

    def destination_identity(self) -> ClusterIdentity:
        return ClusterIdentity(
            context=self.dest_kube_context or None,
            cluster=self.dest_kube_clustername or None,
            namespace=self.dest_namespace or None,
        )

    def source_identity(self) -> ClusterIdentity:
        return ClusterIdentity(
            context=self.source_kube_context or None,
            cluster=self.source_kube_clustername or None,
            namespace=self.source_namespace or None,
        )

    def flag_name(self, field_name: str) -> str:
        """Return the user-facing flag that sets ``field_name`` in this mode."""
        return _flag_for_field(self.mode, field_name)


def recognized_flags(mode: Optional[ReplicationMode]) -> Dict[str, str]:
    """Map every flag name recognized in ``mode`` to its OptionBundle field."""
    flags = dict(IDENTITY_FLAGS)
    if mode is not None:
        flags.update(REPLICATION_FLAGS)
        flags.update({f"{mode.flag_prefix}-{suffix}": field for suffix, field in MODE_FIELDS.items()})
    return flags


def _flag_for_field(mode: Optional[ReplicationMode], field_name: str) -> str:
    for flag, field in recognized_flags(mode).items():
        if field == field_name:
            return flag
    return field_name


def resolve_options(
    mode: Optional[ReplicationMode],
    explicit_flags: Mapping[str, Any],
    config_values: Optional[Mapping[str, Any]] = None,
) -> OptionBundle:
    """
    Layer explicit flags, config-file values and defaults into an OptionBundle.

    Args:
        mode: Side being configured, or None for sync-ssh-secret
        explicit_flags: Flag name to value; None means the flag was not passed
        config_values: Flag name to value as read from the config file

    Returns:
        The resolved OptionBundle

    Raises:
        ConfigError: If a config-file value cannot be converted to the option's type
    """
    config_values = config_values or {}
    defaults = DEFAULTS.get(mode, {})
    values: Dict[str, Any] = {}

    for flag, field in recognized_flags(mode).items():
        if explicit_flags.get(flag) is not None:
            values[field] = explicit_flags[flag]
        elif config_values.get(flag) is not None:
            logger.debug(f"Using {flag}={config_values[flag]!r} from config file")
            values[field] = config_values[flag]
        elif flag in defaults:
            values[field] = defaults[flag]

    try:
        return OptionBundle(mode=mode, **values)
    except PydanticValidationError as e:
        problems = ", ".join(
            f"--{_flag_for_field(mode, str(err['loc'][0]))}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid option value ({problems})") from e
