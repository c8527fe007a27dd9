import pytest

from cloudadmin.errors import CloudError
from cloudadmin.volumes import VolumeCommands, only_unbound_volumes

BOUND = {"volumeid": "vol-a", "connectedhosts": ["node-1", "node-2"]}
UNBOUND = {"volumeid": "vol-b", "connectedhosts": []}
SNAPSHOT = {"snapshotid": "snap-a", "name": "snap"}


class FakeClient:
    def __init__(self):
        self.calls = []

    def find_volumes(self, body):
        self.calls.append(("find_volumes", body))
        return [BOUND, UNBOUND]

    def list_volumes(self):
        self.calls.append(("list_volumes",))
        return [BOUND, UNBOUND]

    def get_volume(self, volume_id):
        self.calls.append(("get_volume", volume_id))
        return BOUND if volume_id == "vol-a" else UNBOUND

    def delete_volume(self, volume_id):
        self.calls.append(("delete_volume", volume_id))
        return {"volumeid": volume_id}

    def set_volume_qos_policy(self, volume_id, body):
        self.calls.append(("set_qos", volume_id, body))
        return {"volumeid": volume_id}

    def cluster_info(self, partition):
        self.calls.append(("cluster_info", partition))
        return []

    def get_snapshot(self, snapshot_id, project_id):
        self.calls.append(("get_snapshot", snapshot_id, project_id))
        return SNAPSHOT

    def find_snapshots(self, body):
        self.calls.append(("find_snapshots", body))
        return [SNAPSHOT]

    def delete_snapshot(self, snapshot_id, project_id):
        self.calls.append(("delete_snapshot", snapshot_id, project_id))
        return SNAPSHOT

    def list_policies(self):
        self.calls.append(("list_policies",))
        return [{"qospolicyid": "p"}]


@pytest.fixture
def client():
    return FakeClient()


def test_only_unbound_volumes():
    assert only_unbound_volumes([BOUND, UNBOUND, {"volumeid": "x"}]) == [UNBOUND, {"volumeid": "x"}]


def test_find_without_filters_lists_all(client):
    result = VolumeCommands(client).find()
    assert result == [BOUND, UNBOUND]
    assert client.calls == [("list_volumes",)]


def test_find_with_filters(client):
    result = VolumeCommands(client).find(project="proj", only_unbound=True)
    assert result == [UNBOUND]
    assert client.calls == [("find_volumes", {"projectid": "proj"})]


def test_describe_requires_volume(client):
    with pytest.raises(ValueError, match="no volume given"):
        VolumeCommands(client).describe([])


def test_delete_connected_volume_fails(client):
    with pytest.raises(CloudError, match="volume is still connected to this node"):
        VolumeCommands(client).delete(["vol-a"], assume_yes=True)
    assert all(call[0] != "delete_volume" for call in client.calls)


def test_delete_with_confirmation(client):
    messages = []

    def confirm(message):
        messages.append(message)
        return True

    result = VolumeCommands(client, confirm).delete(["vol-b"])
    assert result == {"volumeid": "vol-b"}
    assert "vol-b" in messages[0]
    assert client.calls[-1] == ("delete_volume", "vol-b")


def test_delete_declined(client):
    with pytest.raises(CloudError):
        VolumeCommands(client, lambda message: False).delete(["vol-b"])
    assert all(call[0] != "delete_volume" for call in client.calls)


def test_set_qos_requires_one_option(client):
    commands = VolumeCommands(client)
    with pytest.raises(ValueError, match="either qos-id or qos-name must be specified"):
        commands.set_qos(["vol-b"])
    with pytest.raises(ValueError, match="not both"):
        commands.set_qos(["vol-b"], qos_id="a", qos_name="b")


def test_set_qos_requires_exactly_one_arg(client):
    with pytest.raises(ValueError):
        VolumeCommands(client).set_qos(["a", "b"], qos_id="a")


def test_set_qos_by_name(client):
    VolumeCommands(client).set_qos(["vol-b"], qos_name="gold")
    assert client.calls == [("set_qos", "vol-b", {"qospolicyname": "gold"})]


def test_cluster_info_passes_partition(client):
    VolumeCommands(client).cluster_info()
    VolumeCommands(client).cluster_info("part")
    assert client.calls == [("cluster_info", None), ("cluster_info", "part")]


def test_snapshot_find_body(client):
    result = VolumeCommands(client).snapshot_find(project="proj", name="snap")
    assert result == [SNAPSHOT]
    assert client.calls == [("find_snapshots", {"projectid": "proj", "name": "snap"})]


def test_snapshot_describe_requires_arg(client):
    with pytest.raises(ValueError, match="no snapshot given"):
        VolumeCommands(client).snapshot_describe([], project="proj")


def test_snapshot_delete(client):
    result = VolumeCommands(client).snapshot_delete(["snap-a"], project="proj", assume_yes=True)
    assert result == SNAPSHOT
    assert client.calls == [
        ("get_snapshot", "snap-a", "proj"),
        ("delete_snapshot", "snap-a", "proj"),
    ]


def test_list_qos_policies(client):
    assert VolumeCommands(client).list_qos_policies() == [{"qospolicyid": "p"}]