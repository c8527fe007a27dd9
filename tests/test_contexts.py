import pytest

from cloudadmin.contexts import (
    CLOUD_CONTEXT,
    DEFAULT_CONTEXT,
    Context,
    Contexts,
    Version,
    default_context,
    format_context_name,
    get_contexts,
    write_contexts,
)
from cloudadmin.errors import CloudError


@pytest.fixture
def sample():
    return Contexts(
        current_context="prod",
        previous_context="dev",
        contexts={
            "prod": Context(api_url="https://api.example.com/cloud", client_id="client", client_secret="secret"),
            "dev": Context(api_url="https://dev.example.com/cloud", hmac="secret"),
        },
    )


def test_write_then_read_round_trip(tmp_path, sample, capsys):
    path = tmp_path / "config.yaml"
    write_contexts(sample, path)
    assert get_contexts(path) == sample
    assert "prod" in capsys.readouterr().out


def test_reads_yaml_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "current: prod\ncontexts:\n  prod:\n    url: https://api.example.com/cloud\n"
        "    issuer_url: https://issuer.example.com/\n"
    )
    contexts = get_contexts(path)
    assert contexts.current_context == "prod"
    assert contexts.contexts["prod"].api_url == "https://api.example.com/cloud"
    assert contexts.contexts["prod"].issuer_url == "https://issuer.example.com/"
    assert contexts.contexts["prod"].hmac is None


def test_missing_file_raises(tmp_path):
    with pytest.raises(CloudError, match="unable to read config"):
        get_contexts(tmp_path / "absent.yaml")


def test_default_context_without_file(tmp_path):
    assert default_context(tmp_path / "absent.yaml") == DEFAULT_CONTEXT


def test_default_context_uses_current(tmp_path, sample):
    path = tmp_path / "config.yaml"
    write_contexts(sample, path)
    assert default_context(path) == sample.contexts["prod"]


def test_default_context_with_unknown_current(tmp_path, sample):
    sample.current_context = "gone"
    path = tmp_path / "config.yaml"
    write_contexts(sample, path)
    assert default_context(path) == DEFAULT_CONTEXT


def test_default_context_values(tmp_path):
    ctx = default_context(tmp_path / "absent.yaml")
    assert ctx.api_url == "http://localhost:8080/cloud"
    assert ctx.issuer_url == "http://localhost:8080/"


def test_format_context_name_without_suffix():
    assert format_context_name("anything", "") == "anything"


def test_format_context_name_with_suffix_uses_cloud_context():
    assert format_context_name("anything", "prod") == f"{CLOUD_CONTEXT}-prod"


def test_version_to_dict_omits_missing_server():
    assert Version(client="client v1.0.0").to_dict() == {"client": "client v1.0.0"}


def test_version_to_dict_with_server():
    server = {"version": "server v1.0.0"}
    assert Version(client="client v1.0.0", server=server).to_dict() == {
        "client": "client v1.0.0",
        "server": server,
    }