"""Tests for routable address lookup."""

from unittest.mock import AsyncMock, patch

import pytest

from netdata_provisioner.helpers import network
from netdata_provisioner.helpers.process import CompletedProcess


@pytest.mark.parametrize(
    "route, expected",
    [
        ("10.0.0.10 via 10.0.0.254 dev eth0 src 10.0.0.5 uid 0 \n    cache \n", "10.0.0.5"),
        ("local 127.0.0.1 dev lo src 127.0.0.1 uid 0", "127.0.0.1"),
        ("unreachable 10.9.9.9", None),
        ("10.0.0.10 dev eth0 src", None),
        ("", None),
    ],
)
def test_parse_source_ip(route, expected):
    assert network.parse_source_ip(route) == expected


@pytest.mark.asyncio
async def test_get_routable_ip_runs_ip_route():
    completed = CompletedProcess([], 0, "10.0.0.10 dev eth0 src 10.0.0.5 uid 0\n", "")
    with patch.object(network, "run_command", AsyncMock(return_value=completed)) as run:
        assert await network.async_get_routable_ip("10.0.0.10") == "10.0.0.5"
    run.assert_awaited_once_with("ip", "route", "get", "10.0.0.10")
