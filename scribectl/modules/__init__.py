"""
Option resolution, resource building and secret sync for scribe commands.
"""
from .models import (
    AccessMode,
    ClusterIdentity,
    CommonOptions,
    CopyMethod,
    ReplicationMode,
    ResourceMeta,
    ServiceType,
)
from .options import OptionBundle, resolve_options
from .normalize import normalize

__all__ = [
    'AccessMode',
    'ClusterIdentity',
    'CommonOptions',
    'CopyMethod',
    'ReplicationMode',
    'ResourceMeta',
    'ServiceType',
    'OptionBundle',
    'resolve_options',
    'normalize',
]
