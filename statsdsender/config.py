"""Building clients from host application configuration"""
from .statsd import StatsClient
from typing import Any, Dict, Mapping

import json
import logging

DEFAULT_PORT = 8125

log = logging.getLogger("statsdsender.config")


class ConfigError(Exception):
    """Invalid or missing StatsD configuration"""


def load_config(path: str) -> Dict[str, Any]:
    """Read a JSON config file, returning its "statsd" section when it has one"""
    try:
        with open(path) as fp:
            config = json.load(fp)
    except FileNotFoundError as ex:
        raise ConfigError("Cannot read json config file at {!r}".format(path)) from ex
    except ValueError as ex:
        raise ConfigError("Invalid json in config file {!r}: {}".format(path, ex)) from ex

    if not isinstance(config, dict):
        raise ConfigError("Config file {!r} must contain a json object".format(path))
    section = config.get("statsd", config)
    if not isinstance(section, dict):
        raise ConfigError("'statsd' section in {!r} must be a json object".format(path))
    return section


def _parse_port(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError("Invalid statsd port {!r}".format(value))
    try:
        return int(value)
    except (TypeError, ValueError) as ex:
        raise ConfigError("Invalid statsd port {!r}".format(value)) from ex


def get_destination(config: Mapping[str, Any]):
    """Return (host, port) from config, or (None, None) when sending is disabled"""
    address = config.get("address")
    if address:
        if not isinstance(address, str):
            raise ConfigError("Invalid statsd address {!r}".format(address))
        host, colon, port = address.partition(":")
        return host, _parse_port(port) if colon else DEFAULT_PORT

    host = config.get("host")
    if not host:
        return None, None
    if not isinstance(host, str):
        raise ConfigError("Invalid statsd host {!r}".format(host))
    return host, _parse_port(config.get("port", DEFAULT_PORT))


def make_stats_client(config: Mapping[str, Any], **kwargs) -> StatsClient:
    """Return a client, opened when the config names a destination"""
    client = StatsClient(prefix=config.get("prefix") or "", **kwargs)
    host, port = get_destination(config)
    if host is None:
        log.info("No statsd host configured, metrics are disabled")
    else:
        client.open(host, port)
    return client
