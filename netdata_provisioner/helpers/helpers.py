"""Shared helpers. Build and validate configuration. Load it from YAML."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any

import voluptuous as vol
import yaml

from ..exceptions import ConfigurationError
from ..presets.const import INTEGRATION_DEFAULTS
from .types import Configuration

_LOGGER = logging.getLogger(__name__)


def build_configuration_schema(defaults: Mapping[str, Any] | None = None) -> vol.Schema:
    """Unified plugin configuration schema."""
    defaults = INTEGRATION_DEFAULTS if defaults is None else defaults
    return vol.Schema(
        {
            vol.Required("endpoint"): vol.All(str, vol.Length(min=1)),
            vol.Required("port"): vol.All(vol.Coerce(str), vol.Length(min=1)),
            vol.Required("hosts"): [str],
            vol.Optional(
                "max_parallel_hosts", default=defaults["max_parallel_hosts"]
            ): vol.All(vol.Coerce(int), vol.Range(min=1)),
            vol.Optional(
                "disable_on_unload", default=defaults["disable_on_unload"]
            ): vol.Boolean(),
        },
        extra=vol.REMOVE_EXTRA,
    )


# JSON schema handed to the orchestrator UI; mirrors build_configuration_schema().
CONFIGURATION_SCHEMA = {
    "description": "Enable advanced telemetry on hosts using the NetData integration.",
    "type": "object",
    "properties": {
        "endpoint": {
            "type": "string",
            "description": "Host IP for the server where the data should be streamed.",
        },
        "port": {
            "type": "string",
            "description": f"Port where data should be streamed. Default: {INTEGRATION_DEFAULTS['port']}",
        },
        "hosts": {
            "type": "array",
            "title": "Hosts",
            "description": "Hosts to enable telemetry on.",
            "items": {"type": "string", "$type": "Host"},
        },
        "max_parallel_hosts": {
            "type": "integer",
            "description": "How many hosts are provisioned at the same time.",
            "default": INTEGRATION_DEFAULTS["max_parallel_hosts"],
        },
        "disable_on_unload": {
            "type": "boolean",
            "description": "Disable the local NetData service when the plugin is unloaded.",
            "default": INTEGRATION_DEFAULTS["disable_on_unload"],
        },
    },
    "required": ["endpoint", "port", "hosts"],
}


def validate_configuration(conf: Mapping[str, Any]) -> Configuration:
    """Validate raw configuration and freeze it."""
    try:
        data = build_configuration_schema()(dict(conf or {}))
    except vol.Invalid as err:
        _LOGGER.error("Invalid NetData configuration: %s", err)
        raise ConfigurationError(f"Invalid configuration: {err}") from err
    return Configuration(
        endpoint=data["endpoint"],
        port=data["port"],
        hosts=tuple(data["hosts"]),
        max_parallel_hosts=data["max_parallel_hosts"],
        disable_on_unload=data["disable_on_unload"],
    )


def load_configuration_file(config_path: str) -> Configuration:
    """Load plugin configuration from a YAML file.

    Entry point for NetDataPlugin.configure_from_file.
    """
    config_path = Path(config_path)
    try:
        with config_path.open("r", encoding="utf-8") as file:
            raw = yaml.safe_load(file) or {}
    except FileNotFoundError as err:
        _LOGGER.error("Configuration file not found: %s", config_path)
        raise ConfigurationError(f"Configuration file not found: {config_path}") from err
    except yaml.YAMLError as err:
        _LOGGER.error("Error parsing YAML from %s: %s", config_path, err)
        raise ConfigurationError(f"Invalid YAML in {config_path}") from err
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Expected a mapping in {config_path}")
    return validate_configuration(raw)
