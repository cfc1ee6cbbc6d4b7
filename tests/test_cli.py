"""Tests for the meshmirror CLI."""

import pytest
import yaml
from typer.testing import CliRunner

from meshmirror.cli import main as cli_main

runner = CliRunner()

CONNECTIONS = {
    "apiVersion": "networking.meshmirror.io/v1beta1",
    "kind": "ForeignClusterConnection",
    "metadata": {"name": "b-c"},
    "spec": {"foreignClusterA": "cluster-b", "foreignClusterB": "cluster-c"},
    "status": {
        "foreignClusterANetworking": {
            "podCIDR": "10.0.1.0/24",
            "remappedPodCIDR": "10.244.0.0/24",
        },
        "foreignClusterBNetworking": {
            "podCIDR": "10.0.2.0/24",
            "remappedPodCIDR": "10.245.0.0/24",
        },
    },
}

NODES = {
    "apiVersion": "v1",
    "kind": "List",
    "items": [
        {
            "kind": "Node",
            "metadata": {
                "name": "vk-cluster-c",
                "labels": {"meshmirror.io/remote-cluster-id": "cluster-c"},
            },
        },
        {
            "kind": "Node",
            "metadata": {
                "name": "worker-1",
                "labels": {"meshmirror.io/remote-cluster-id": "cluster-a"},
            },
        },
    ],
}

ENDPOINT_SLICE = {
    "apiVersion": "discovery.k8s.io/v1",
    "kind": "EndpointSlice",
    "metadata": {"name": "web-abcde", "namespace": "demo"},
    "addressType": "IPv4",
    "endpoints": [
        {"addresses": ["10.0.1.5"], "nodeName": "vk-cluster-c"},
        {"addresses": ["10.0.9.9"], "nodeName": "worker-1"},
    ],
    "ports": [{"name": "http", "protocol": "TCP", "port": 80}],
}


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    monkeypatch.setattr(cli_main, "configure_logging", lambda *args, **kwargs: None)
    for name in ("POD_NAMESPACE", "MESHMIRROR_POD_NAMESPACE", "MESHMIRROR_CLUSTER_NAME"):
        monkeypatch.delenv(name, raising=False)


def write_yaml(path, obj):
    path.write_text(yaml.safe_dump(obj))
    return str(path)


def test_resolve_shortcut() -> None:
    result = runner.invoke(
        cli_main.app, ["shortcut", "resolve", "10.0.1.5", "-p", "10.0.1.0/24=10.244.0.0/24"]
    )
    assert result.exit_code == 0
    assert "10.244.0.5" in result.output


def test_resolve_no_shortcut() -> None:
    result = runner.invoke(
        cli_main.app, ["shortcut", "resolve", "10.0.3.5", "-p", "10.0.1.0/24=10.244.0.0/24"]
    )
    assert result.exit_code == 0
    assert "no shortcut applies" in result.output


def test_resolve_invalid_address() -> None:
    result = runner.invoke(
        cli_main.app, ["shortcut", "resolve", "not-an-ip", "-p", "10.0.1.0/24=10.244.0.0/24"]
    )
    assert result.exit_code == 1


def test_resolve_bad_pair_syntax() -> None:
    result = runner.invoke(cli_main.app, ["shortcut", "resolve", "10.0.1.5", "-p", "10.0.1.0/24"])
    assert result.exit_code != 0


def test_list_cidrs(tmp_path) -> None:
    path = write_yaml(tmp_path / "fcc.yaml", CONNECTIONS)
    result = runner.invoke(cli_main.app, ["shortcut", "cidrs", path, "--cluster", "cluster-c"])
    assert result.exit_code == 0
    assert "10.0.2.0/24" in result.output
    assert "10.245.0.0/24" in result.output


def test_list_cidrs_unknown_cluster(tmp_path) -> None:
    path = write_yaml(tmp_path / "fcc.yaml", CONNECTIONS)
    result = runner.invoke(cli_main.app, ["shortcut", "cidrs", path, "--cluster", "cluster-z"])
    assert result.exit_code == 1


def test_translate(tmp_path) -> None:
    result = runner.invoke(
        cli_main.app,
        [
            "reflect",
            "translate",
            write_yaml(tmp_path / "slice.yaml", ENDPOINT_SLICE),
            "--cluster",
            "cluster-b",
            "--connections",
            write_yaml(tmp_path / "fcc.yaml", CONNECTIONS),
            "--nodes",
            write_yaml(tmp_path / "nodes.yaml", NODES),
            "--namespace",
            "tenant-ns",
        ],
    )
    assert result.exit_code == 0
    assert "ShadowEndpointSlice" in result.output
    assert "10.244.0.5" in result.output
    assert "meshmirror.io/shortcut-addresses" in result.output


def test_translate_without_cluster_identity(tmp_path) -> None:
    result = runner.invoke(
        cli_main.app, ["reflect", "translate", write_yaml(tmp_path / "s.yaml", ENDPOINT_SLICE)]
    )
    assert result.exit_code == 1


def test_translate_missing_file(tmp_path) -> None:
    result = runner.invoke(
        cli_main.app,
        ["reflect", "translate", str(tmp_path / "missing.yaml"), "--cluster", "cluster-b"],
    )
    assert result.exit_code == 1


def test_identity() -> None:
    result = runner.invoke(cli_main.app, ["identity", "--namespace", "liqo-tenant-cluster-b"])
    assert result.exit_code == 0
    assert "cluster-b" in result.output


def test_identity_unknown_namespace() -> None:
    result = runner.invoke(cli_main.app, ["identity", "--namespace", "kube-system"])
    assert result.exit_code == 1


def test_version() -> None:
    result = runner.invoke(cli_main.app, ["version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


@pytest.mark.parametrize(
    "name, value",
    [("MESHMIRROR_LOG_LEVEL", "loud"), ("MESHMIRROR_IPAM_TIMEOUT_SECONDS", "soon")],
)
def test_invalid_environment_value(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    result = runner.invoke(cli_main.app, ["version"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
