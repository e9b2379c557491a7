"""Shared fixtures: a fake orchestrator with scriptable hosts."""

from dataclasses import dataclass, field
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from netdata_provisioner.helpers.types import Configuration, ServiceStatus, StatusCheck
from netdata_provisioner.provisioner import NetDataProvisioner

RUNNING = ServiceStatus("loaded", "active", "running", "enabled")


@dataclass
class FakeHost:
    """Host descriptor as resolved by the orchestrator."""

    uuid: str
    address: str
    xapi_ref: str = "OpaqueRef:host"
    fail_probe: bool = False
    fail_install: bool = False
    calls: list = field(default_factory=list)


class FakeXapi:
    """Records host.call_plugin invocations and answers them."""

    def __init__(self, host: FakeHost) -> None:
        self.host = host

    async def call(self, method, ref, plugin, procedure, params):
        self.host.calls.append((method, ref, plugin, procedure, params))
        if procedure == "is_netdata_installed" and self.host.fail_probe:
            raise RuntimeError("XENAPI_PLUGIN_FAILURE")
        if procedure == "install_netdata" and self.host.fail_install:
            raise RuntimeError("install failed")
        if procedure == "get_netdata_api_key":
            return f"key-of-{self.host.uuid}"
        return "ok"


@pytest.fixture
def hosts():
    """Two hosts keyed by id."""
    return {
        "host-a": FakeHost(uuid="uuid-a", address="10.0.0.10"),
        "host-b": FakeHost(uuid="uuid-b", address="10.0.0.11"),
    }


@pytest.fixture
def orchestrator(hosts):
    """Orchestrator resolving ids from `hosts` and recording registrations."""
    xo = MagicMock()
    xo.get_object.side_effect = lambda object_id, object_type: hosts[object_id]
    xo.get_xapi.side_effect = FakeXapi
    xo.unset_calls = []
    xo.registered = set()

    def add_api_methods(methods):
        names = {f"{ns}.{name}" for ns, table in methods.items() for name in table}
        clash = sorted(names & xo.registered)
        if clash:
            raise RuntimeError(f"API method {clash[0]} already exists")
        xo.registered |= names
        unset = MagicMock(name="unset", side_effect=lambda: xo.registered.difference_update(names))
        xo.unset_calls.append(unset)
        return unset

    xo.add_api_methods.side_effect = add_api_methods
    return xo


@pytest.fixture
def config():
    """Configuration covering both hosts."""
    return Configuration(endpoint="10.0.0.1", port="19999", hosts=("host-a", "host-b"))


@pytest.fixture
def provisioner(orchestrator, config):
    """Provisioner under test."""
    return NetDataProvisioner(orchestrator, config)


@pytest.fixture
def appliance():
    """Patch every appliance side effect; yield the mocks by name."""
    mocks = {
        "get_status": AsyncMock(return_value=StatusCheck(RUNNING)),
        "enable": AsyncMock(),
        "restart": AsyncMock(),
        "disable": AsyncMock(),
        "read_api_key": AsyncMock(return_value="receiver-guid"),
        "write_stream": AsyncMock(),
        "read_stream": AsyncMock(return_value=None),
        "routable_ip": AsyncMock(return_value="10.0.0.5"),
    }
    with (
        patch("netdata_provisioner.helpers.service.async_get_status", mocks["get_status"]),
        patch("netdata_provisioner.helpers.service.async_enable", mocks["enable"]),
        patch("netdata_provisioner.helpers.service.async_restart", mocks["restart"]),
        patch("netdata_provisioner.helpers.service.async_disable", mocks["disable"]),
        patch("netdata_provisioner.helpers.stream.async_read_api_key", mocks["read_api_key"]),
        patch("netdata_provisioner.helpers.stream.async_write_stream_config", mocks["write_stream"]),
        patch("netdata_provisioner.helpers.stream.async_read_stream_config", mocks["read_stream"]),
        patch("netdata_provisioner.helpers.network.async_get_routable_ip", mocks["routable_ip"]),
    ):
        yield mocks
