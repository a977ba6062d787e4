import pytest

from scribectl.errors import InvalidOptionError, ParseError
from scribectl.modules import replication
from scribectl.modules.models import AccessMode, CopyMethod, ServiceType
from scribectl.modules.normalize import (
    normalize,
    optional,
    parse_capacity,
    parse_port,
    parse_provider_parameters,
)


@pytest.mark.parametrize("value,expected", [
    ("None", CopyMethod.NONE),
    ("none", CopyMethod.NONE),
    ("Clone", CopyMethod.CLONE),
    ("CLONE", CopyMethod.CLONE),
    ("snapshot", CopyMethod.SNAPSHOT),
    ("SnapShot", CopyMethod.SNAPSHOT),
])
def test_copy_method_is_case_insensitive(value, expected):
    assert CopyMethod.parse(value) is expected


def test_unknown_copy_method(destination_bundle):
    bundle = destination_bundle({"dest-copy-method": "Rsync", "dest-access-mode": "ReadWriteOnce"})
    with pytest.raises(InvalidOptionError, match="unrecognized --dest-copy-method: Rsync"):
        normalize(bundle)


def test_access_mode_is_case_sensitive():
    assert AccessMode.parse("ReadOnlyMany") is AccessMode.READ_ONLY_MANY
    with pytest.raises(InvalidOptionError, match="readwriteonce"):
        AccessMode.parse("readwriteonce")


def test_unknown_access_mode_names_the_mode_flag(source_bundle):
    bundle = source_bundle({
        "source-copy-method": "Clone",
        "source-access-mode": "ReadWriteAll",
        "source-pvc": "mysql-claim",
    })
    with pytest.raises(InvalidOptionError, match="--source-access-mode ReadWriteAll"):
        normalize(bundle)


@pytest.mark.parametrize("value,expected", [
    ("", ServiceType.CLUSTER_IP),
    ("ClusterIP", ServiceType.CLUSTER_IP),
    ("clusterip", ServiceType.CLUSTER_IP),
    ("clusterIP", ServiceType.CLUSTER_IP),
    ("LoadBalancer", ServiceType.LOAD_BALANCER),
    ("loadbalancer", ServiceType.LOAD_BALANCER),
    ("Loadbalancer", ServiceType.LOAD_BALANCER),
])
def test_service_type_aliases(value, expected):
    assert ServiceType.parse(value) is expected


def test_unknown_service_type():
    with pytest.raises(InvalidOptionError, match="NodePort"):
        ServiceType.parse("NodePort")


def test_provider_parameters():
    assert parse_provider_parameters("") == {}
    assert parse_provider_parameters("key/value") == {"key": "value"}
    assert parse_provider_parameters("key/value,key1/value1") == {"key": "value", "key1": "value1"}


@pytest.mark.parametrize("raw", [
    "key/value key1/value1",
    "keyvalue",
    "key/value,key1",
    "a/b/c",
])
def test_malformed_provider_parameters_quote_the_input(raw):
    with pytest.raises(ParseError) as excinfo:
        parse_provider_parameters(raw)
    assert raw in str(excinfo.value)
    assert "key/value,key1/value1" in str(excinfo.value)


def test_capacity():
    assert parse_capacity("2Gi") == "2Gi"
    assert parse_capacity("500M") == "500M"
    assert parse_capacity("") is None


def test_bad_capacity_keeps_the_cause():
    with pytest.raises(ParseError, match="lots") as excinfo:
        parse_capacity("lots")
    assert isinstance(excinfo.value.__cause__, ValueError)


@pytest.mark.parametrize("capacity", ["NaN", "Infinity", "inf", "-inf", "sNaN", "1_000Gi", " 2Gi", "2Gi\n"])
def test_capacity_must_be_a_plain_finite_quantity(capacity):
    with pytest.raises(ParseError, match="error parsing capacity"):
        parse_capacity(capacity)


def test_non_finite_capacity_fails_before_connecting(destination_bundle, monkeypatch):
    def fail(bundle):
        raise AssertionError("cluster clients should not be built")
    monkeypatch.setattr(replication, "build_cluster_clients", fail)
    bundle = destination_bundle({
        "dest-copy-method": "Snapshot",
        "dest-capacity": "NaN",
        "dest-access-mode": "ReadWriteOnce",
    })
    with pytest.raises(ParseError):
        replication.new_destination(bundle)


def test_port():
    assert parse_port(None) is None
    assert parse_port(0) is None
    assert parse_port(2222) == 2222
    with pytest.raises(InvalidOptionError, match="--port"):
        parse_port(70000)
    with pytest.raises(InvalidOptionError):
        parse_port(-1)


def test_optional():
    assert optional("") is None
    assert optional(None) is None
    assert optional("x") == "x"


def test_normalize_destination(destination_bundle):
    common = normalize(destination_bundle({
        "dest-copy-method": "snapshot",
        "dest-access-mode": "ReadWriteOnce",
        "dest-storage-class-name": "",
        "port": 2222,
        "provider": "domain.com/provider",
        "provider-parameters": "region/us-east-1",
    }))
    assert common.copy_method is CopyMethod.SNAPSHOT
    assert common.access_modes == [AccessMode.READ_WRITE_ONCE]
    assert common.capacity == "2Gi"
    assert common.storage_class_name is None
    assert common.service_type is ServiceType.CLUSTER_IP
    assert common.port == 2222
    assert common.parameters == {"region": "us-east-1"}
    assert common.schedule is None


def test_normalize_without_access_mode(source_bundle):
    common = normalize(source_bundle({"source-copy-method": "None", "source-pvc": "mysql-claim"}))
    assert common.access_modes == []
    assert common.pvc == "mysql-claim"
    assert common.schedule == "*/3 * * * *"
