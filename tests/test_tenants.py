import pytest

from cloudadmin.errors import CloudError, NotFoundError
from cloudadmin.tenants import TenantCommands, read_tenant_documents, tenant_id


class FakeClient:
    def __init__(self, tenants=None, get_error=None, list_error=None):
        self.tenants = dict(tenants or {})
        self.get_error = get_error
        self.list_error = list_error
        self.updates = []
        self.find_bodies = []
        self.list_calls = 0

    def get_tenant(self, identifier):
        if self.get_error is not None:
            raise self.get_error
        if identifier not in self.tenants:
            raise NotFoundError(f"tenant {identifier} not found")
        return self.tenants[identifier]

    def list_tenants(self):
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.tenants.values())

    def find_tenants(self, body):
        self.find_bodies.append(body)
        return [t for t in self.tenants.values() if t["meta"]["id"] == body.get("id")]

    def update_tenant(self, body):
        self.updates.append(body)
        return body


TENANT_A = {"meta": {"id": "tenant-a"}, "name": "A", "description": "first"}


def test_tenant_id_single_argument():
    assert tenant_id("edit", ["tenant-a"]) == "tenant-a"


def test_tenant_id_missing_argument():
    with pytest.raises(ValueError, match="tenant edit requires tenantID as argument"):
        tenant_id("edit", [])


def test_tenant_id_too_many_arguments():
    with pytest.raises(ValueError, match="tenant edit requires exactly one tenantID as argument"):
        tenant_id("edit", ["a", "b"])


def test_read_tenant_documents_multiple():
    docs = read_tenant_documents("name: one\n---\nname: two\n---\n")
    assert [d["name"] for d in docs] == ["one", "two"]


def test_read_tenant_documents_rejects_scalar():
    with pytest.raises(ValueError):
        read_tenant_documents("- a\n- b\n")


def test_read_tenant_documents_rejects_invalid_yaml():
    with pytest.raises(ValueError, match="unable to parse yaml"):
        read_tenant_documents("a: [unclosed")


def test_describe_returns_tenant():
    commands = TenantCommands(FakeClient({"tenant-a": TENANT_A}))
    assert commands.describe(["tenant-a"]) == TENANT_A


def test_describe_requires_argument():
    commands = TenantCommands(FakeClient())
    with pytest.raises(ValueError, match="requires tenantID as argument"):
        commands.describe([])


def test_describe_wraps_errors():
    commands = TenantCommands(FakeClient())
    with pytest.raises(CloudError, match="^tenant describe error:") as info:
        commands.describe(["missing"])
    assert info.value.status == 404


def test_list_without_filters_lists_all():
    client = FakeClient({"tenant-a": TENANT_A})
    assert TenantCommands(client).list() == [TENANT_A]
    assert client.list_calls == 1
    assert client.find_bodies == []


def test_list_with_filters_finds():
    client = FakeClient({"tenant-a": TENANT_A})
    assert TenantCommands(client).list(tenant_id="tenant-a") == [TENANT_A]
    assert client.find_bodies == [{"id": "tenant-a"}]
    assert client.list_calls == 0


def test_list_wraps_errors():
    client = FakeClient(list_error=CloudError("boom", 500))
    with pytest.raises(CloudError, match="^tenant list error:boom$"):
        TenantCommands(client).list()


def test_apply_updates_existing_tenant():
    client = FakeClient({"tenant-a": TENANT_A})
    text = "meta:\n  id: tenant-a\nname: renamed\ndescription: changed\nunrelated: x\n"
    results = TenantCommands(client).apply(text)
    expected = {"meta": {"id": "tenant-a"}, "name": "renamed", "description": "changed"}
    assert client.updates == [expected]
    assert results == [expected]


def test_apply_rejects_unknown_tenant():
    client = FakeClient()
    with pytest.raises(CloudError, match="only tenant update is supported"):
        TenantCommands(client).apply("meta:\n  id: nobody\n")
    assert client.updates == []


def test_apply_propagates_other_errors():
    client = FakeClient(get_error=CloudError("server down", 500))
    with pytest.raises(CloudError, match="server down"):
        TenantCommands(client).apply("meta:\n  id: tenant-a\n")


def test_apply_requires_meta():
    with pytest.raises(ValueError, match="meta"):
        TenantCommands(FakeClient()).apply("name: nothing\n")


def test_update_from_text_single_document():
    client = FakeClient()
    result = TenantCommands(client).update_from_text("meta:\n  id: tenant-a\nname: A\n")
    assert result == {"meta": {"id": "tenant-a"}, "name": "A"}
    assert client.updates == [result]


def test_update_from_text_rejects_several_documents():
    client = FakeClient()
    with pytest.raises(ValueError, match="more or less than one tenant given:2"):
        TenantCommands(client).update_from_text("name: a\n---\nname: b\n")
    assert client.updates == []