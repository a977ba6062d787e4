import pytest
from kubernetes.client.rest import ApiException

from scribectl.config import Config
from scribectl.modules.models import ReplicationMode
from scribectl.modules.options import resolve_options
from scribectl.utils.kube import ClusterClients


class FakeCustomObjectsApi:
    """In-memory stand-in for CustomObjectsApi."""

    def __init__(self):
        self.objects = {}

    def create_namespaced_custom_object(self, group, version, namespace, plural, body):
        store = self.objects.setdefault((namespace, plural), {})
        name = body["metadata"]["name"]
        if name in store:
            raise ApiException(status=409, reason="Conflict")
        store[name] = body
        return body

    def list_namespaced_custom_object(self, group, version, namespace, plural):
        return {"items": list(self.objects.get((namespace, plural), {}).values())}


class FakeCoreV1Api:
    """In-memory stand-in for CoreV1Api secrets."""

    def __init__(self):
        self.secrets = {}

    def read_namespaced_secret(self, name, namespace):
        try:
            return self.secrets[(namespace, name)]
        except KeyError:
            raise ApiException(status=404, reason="Not Found")

    def create_namespaced_secret(self, namespace, body):
        key = (namespace, body.metadata.name)
        if key in self.secrets:
            raise ApiException(status=409, reason="AlreadyExists")
        self.secrets[key] = body
        return body


class FakeCluster:
    def __init__(self, side, namespace, context="kind-kind"):
        self.side = side
        self.namespace = namespace
        self.context = context
        self.cluster = context
        self.host = f"https://{context}.example.com:6443"
        self.custom_objects = FakeCustomObjectsApi()
        self.core = FakeCoreV1Api()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test in an empty directory with no SCRIBE_CONFIG override."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Config, "CONFIG_FILE", "")
    return tmp_path


@pytest.fixture
def clients():
    return ClusterClients(
        source=FakeCluster("source", "source-ns", context="source-ctx"),
        destination=FakeCluster("destination", "dest-ns", context="dest-ctx"),
    )


@pytest.fixture
def destination_bundle():
    def make(flags=None, config=None):
        return resolve_options(ReplicationMode.DESTINATION, flags or {}, config or {})
    return make


@pytest.fixture
def source_bundle():
    def make(flags=None, config=None):
        return resolve_options(ReplicationMode.SOURCE, flags or {}, config or {})
    return make
