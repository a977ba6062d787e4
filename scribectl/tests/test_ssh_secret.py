import logging

import pytest
from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import MaxRetryError, ProtocolError

from scribectl.errors import CreationError, KubeApiError, KubeConnectionError, NotFoundError
from scribectl.modules import ssh_secret
from scribectl.modules.options import resolve_options

SECRET_NAME = "scribe-rsync-dest-src-dest-ns-destination"


def add_destination(clients, name):
    store = clients.destination.custom_objects.objects.setdefault(("dest-ns", "replicationdestinations"), {})
    store[name] = {"metadata": {"name": name, "namespace": "dest-ns"}}


def add_secret(clients, name=SECRET_NAME):
    secret = client.V1Secret(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace="dest-ns",
            uid="0b7d5c5e-1111-2222-3333-444455556666",
            resource_version="4242",
            owner_references=[client.V1OwnerReference(
                api_version="scribe.backube/v1alpha1",
                kind="ReplicationDestination",
                name="dest-ns-destination",
                uid="9f2e0c2a-aaaa-bbbb-cccc-ddddeeeeffff",
            )],
        ),
        data={"source": "c3NoLWtleQ==", "destination.pub": "cHVia2V5"},
        type="Opaque",
    )
    clients.destination.core.secrets[("dest-ns", name)] = secret
    return secret


def test_default_secret_name():
    assert ssh_secret.default_secret_name("dest-ns-destination") == SECRET_NAME


def test_secret_name_from_single_destination(clients):
    add_destination(clients, "dest-ns-destination")
    assert ssh_secret.resolve_secret_name(clients) == SECRET_NAME


def test_secret_name_from_several_destinations(clients, caplog):
    add_destination(clients, "zeta")
    add_destination(clients, "alpha")
    with caplog.at_level(logging.WARNING):
        name = ssh_secret.resolve_secret_name(clients)
    assert name == "scribe-rsync-dest-src-alpha"
    assert "using alpha" in caplog.text


def test_secret_name_without_destination(clients):
    with pytest.raises(NotFoundError, match="dest-ns"):
        ssh_secret.resolve_secret_name(clients)


def test_explicit_secret_name_skips_lookup(clients, monkeypatch):
    def fail(**kwargs):
        raise AssertionError("destinations should not be listed")
    monkeypatch.setattr(clients.destination.custom_objects, "list_namespaced_custom_object", fail)
    assert ssh_secret.resolve_secret_name(clients, "my-keys") == "my-keys"


def test_sync_copies_data_with_fresh_metadata(clients):
    original = add_secret(clients)
    created = ssh_secret.sync_ssh_secret(clients, SECRET_NAME)

    assert clients.source.core.secrets[("source-ns", SECRET_NAME)] is created
    assert created.metadata.name == SECRET_NAME
    assert created.metadata.namespace == "source-ns"
    assert created.metadata.owner_references is None
    assert created.metadata.uid is None
    assert created.metadata.resource_version is None
    assert created.data == original.data
    assert created.data is not original.data
    assert created.type == "Opaque"
    assert original.metadata.namespace == "dest-ns"


def test_missing_secret(clients):
    with pytest.raises(NotFoundError, match=f"{SECRET_NAME} not found in namespace dest-ns"):
        ssh_secret.sync_ssh_secret(clients, SECRET_NAME)
    assert clients.source.core.secrets == {}


def test_read_failure_is_not_a_not_found(clients, monkeypatch):
    def forbidden(name, namespace):
        raise ApiException(status=403, reason="Forbidden")
    monkeypatch.setattr(clients.destination.core, "read_namespaced_secret", forbidden)
    with pytest.raises(KubeApiError, match="403"):
        ssh_secret.sync_ssh_secret(clients, SECRET_NAME)


def test_existing_target_secret_is_not_overwritten(clients):
    add_secret(clients)
    ssh_secret.sync_ssh_secret(clients, SECRET_NAME)
    with pytest.raises(CreationError, match="409"):
        ssh_secret.sync_ssh_secret(clients, SECRET_NAME)


def test_sync_from_options(clients):
    add_destination(clients, "dest-ns-destination")
    add_secret(clients)
    bundle = resolve_options(None, {}, {})
    created = ssh_secret.sync_from_options(bundle, clients)
    assert created.metadata.name == SECRET_NAME


def test_sync_from_options_with_named_secret(clients):
    add_secret(clients, "my-keys")
    bundle = resolve_options(None, {"ssh-keys-secret": "my-keys"}, {})
    created = ssh_secret.sync_from_options(bundle, clients)
    assert ("source-ns", "my-keys") in clients.source.core.secrets
    assert created.metadata.namespace == "source-ns"


def test_unreachable_destination_while_listing(clients, monkeypatch):
    def refused(**kwargs):
        raise MaxRetryError(None, "/apis/scribe.backube/v1alpha1/namespaces/dest-ns/replicationdestinations")
    monkeypatch.setattr(clients.destination.custom_objects, "list_namespaced_custom_object", refused)
    with pytest.raises(KubeConnectionError, match="destination cluster at https://dest-ctx.example.com:6443"):
        ssh_secret.resolve_secret_name(clients)


def test_unreachable_destination_while_reading(clients, monkeypatch):
    def aborted(name, namespace):
        raise ProtocolError("Connection aborted.")
    monkeypatch.setattr(clients.destination.core, "read_namespaced_secret", aborted)
    with pytest.raises(KubeConnectionError, match="reading secret"):
        ssh_secret.sync_ssh_secret(clients, SECRET_NAME)


def test_unreachable_source_while_creating(clients, monkeypatch):
    add_secret(clients)

    def refused(namespace, body):
        raise MaxRetryError(None, "/api/v1/namespaces/source-ns/secrets")
    monkeypatch.setattr(clients.source.core, "create_namespaced_secret", refused)
    with pytest.raises(KubeConnectionError, match="source cluster at https://source-ctx.example.com:6443"):
        ssh_secret.sync_ssh_secret(clients, SECRET_NAME)
