"""Conversion of resolved options into the typed fields of a replication spec."""
from typing import Dict, Optional

from kubernetes.utils import parse_quantity

from ..errors import InvalidOptionError, ParseError
from .models import AccessMode, CommonOptions, CopyMethod, ServiceType
from .options import OptionBundle


def optional(value: Optional[str]) -> Optional[str]:
    """Empty string in, None out; anything else passes through."""
    return value if value else None


def parse_capacity(capacity: str) -> Optional[str]:
    """Check that ``capacity`` is a finite Kubernetes quantity and return it unchanged.

    ``parse_quantity`` builds on ``Decimal``, which also accepts ``NaN``,
    ``Infinity``, digit separators and surrounding blanks; the API server
    rejects all of those, so they are refused here.
    """
    if not capacity:
        return None
    if capacity != capacity.strip() or "_" in capacity:
        raise ParseError(f"error parsing capacity {capacity!r}: not a valid quantity")
    try:
        value = parse_quantity(capacity)
    except (ValueError, ArithmeticError) as e:
        raise ParseError(f"error parsing capacity {capacity!r}: {e}") from e
    if not value.is_finite():
        raise ParseError(f"error parsing capacity {capacity!r}: quantity must be a finite number")
    return capacity


def parse_provider_parameters(raw: str) -> Dict[str, str]:
    """
    Parse ``key/value,key1/value1`` into a dict.

    Raises:
        ParseError: If any pair is not exactly ``key/value``; the message
            quotes the whole string.
    """
    parameters: Dict[str, str] = {}
    if not raw:
        return parameters
    for kv in raw.split(","):
        pair = kv.split("/")
        if len(pair) != 2:
            raise ParseError(
                f"error parsing --provider-parameters {raw}, "
                "must be passed as key/value,key1/value1..."
            )
        parameters[pair[0]] = pair[1]
    return parameters


def parse_port(port: Optional[int]) -> Optional[int]:
    if not port:
        return None
    if port < 0 or port > 65535:
        raise InvalidOptionError(f"invalid --port {port}, must be between 1 and 65535")
    return port


def normalize(bundle: OptionBundle) -> CommonOptions:
    """Validate the user-facing strings in ``bundle`` and convert them to CommonOptions.

    Raises:
        InvalidOptionError: For an unrecognized copy method, access mode or service type
        ParseError: For a malformed capacity or provider-parameter string
    """
    copy_method = CopyMethod.parse(bundle.copy_method, bundle.flag_name("copy_method"))

    access_modes = []
    if bundle.access_mode:
        access_modes.append(AccessMode.parse(bundle.access_mode, bundle.flag_name("access_mode")))

    return CommonOptions(
        copy_method=copy_method,
        service_type=ServiceType.parse(bundle.service_type, bundle.flag_name("service_type")),
        access_modes=access_modes,
        capacity=parse_capacity(bundle.capacity),
        storage_class_name=optional(bundle.storage_class_name),
        volume_snapshot_class_name=optional(bundle.volume_snapshot_class_name),
        pvc=optional(bundle.pvc),
        address=optional(bundle.address),
        ssh_keys=optional(bundle.ssh_keys_secret),
        ssh_user=optional(bundle.ssh_user),
        path=optional(bundle.path),
        port=parse_port(bundle.port),
        schedule=optional(bundle.schedule),
        provider=optional(bundle.provider),
        parameters=parse_provider_parameters(bundle.provider_parameters),
    )
