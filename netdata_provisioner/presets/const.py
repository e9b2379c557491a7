"""Constants and helpers."""

DOMAIN = "netdata"
SERVICE_NAME = "netdata"

# Remote plugin on the hypervisor side
HOST_PLUGIN = "netdata.py"
HOST_CALL_PLUGIN = "host.call_plugin"
PROC_GET_API_KEY = "get_netdata_api_key"
PROC_IS_INSTALLED = "is_netdata_installed"
PROC_INSTALL = "install_netdata"

# Appliance filesystem
API_KEY_PATH = "/var/lib/netdata/registry/netdata.public.unique.id"
STREAM_CONF_PATH = "/etc/netdata/stream.conf"
APT_SOURCE_PATH = "/etc/apt/sources.list.d/netdata.list"
KEYRING_PATH = "/usr/share/keyrings/netdata.gpg"

NETDATA_REPO = "https://packagecloud.io/netdata/netdata/debian/"
NETDATA_KEY = "https://packagecloud.io/netdata/netdata/gpgkey"

INTEGRATION_DEFAULTS = {
    "port": "19999",
    "max_parallel_hosts": 10,
    "disable_on_unload": False,
}


def host_destination(ip: str | None, port: str) -> str:
    """Return the stream destination a host should push metrics to."""
    return f"tcp:{ip}:{port}"
