# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""
Send a single metric from the command line

"""
from . import __version__
from .config import ConfigError, DEFAULT_PORT, get_destination, load_config
from .statsd import StatsClient

import argparse
import logging
import sys

LOG_FORMAT = "%(asctime)s\t%(name)s\t%(levelname)s\t%(message)s"

METRICS_WITH_VALUE = {"timing", "count", "gauge", "set"}
METRICS_WITHOUT_VALUE = {"increment", "decrement"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="statsdsender", description="Send a metric to a StatsD collector")
    parser.add_argument("--version", action="version", version="statsdsender {}".format(__version__))
    parser.add_argument("--config", help="json config file, the 'statsd' section is used if present")
    parser.add_argument("--host", help="collector hostname or IPv4 address")
    parser.add_argument("--port", type=int, help="collector port (default {})".format(DEFAULT_PORT))
    parser.add_argument("--prefix", help="string prepended to the metric key")
    parser.add_argument("--sample-rate", type=float, default=1.0, help="sample rate in (0, 1]")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("metric", choices=sorted(METRICS_WITH_VALUE | METRICS_WITHOUT_VALUE))
    parser.add_argument("key")
    parser.add_argument("value", type=int, nargs="?")
    return parser


def main(args=None) -> int:
    parser = build_parser()
    opts = parser.parse_args(args)
    logging.basicConfig(level=opts.log_level, format=LOG_FORMAT)

    if opts.metric in METRICS_WITH_VALUE and opts.value is None:
        parser.print_usage(sys.stderr)
        print("{}: a value is required for {}".format(parser.prog, opts.metric), file=sys.stderr)
        return 1
    if opts.metric in METRICS_WITHOUT_VALUE and opts.value is not None:
        parser.print_usage(sys.stderr)
        print("{}: {} does not take a value".format(parser.prog, opts.metric), file=sys.stderr)
        return 1

    try:
        config = load_config(opts.config) if opts.config else {}
        host, port = get_destination(config)
    except ConfigError as ex:
        logging.error("%s", ex)
        return 1
    if opts.host is not None:
        host = opts.host
    if opts.port is not None:
        port = opts.port
    if host is None:
        logging.error("No statsd host given, use --host or --config")
        return 1

    prefix = opts.prefix if opts.prefix is not None else config.get("prefix") or ""
    with StatsClient(prefix=prefix) as stats:
        stats.open(host, port if port is not None else DEFAULT_PORT)
        if not stats.is_open:
            return 1
        method = getattr(stats, opts.metric)
        if opts.metric in METRICS_WITH_VALUE:
            method(opts.key, opts.value, sample_rate=opts.sample_rate)
        else:
            method(opts.key, sample_rate=opts.sample_rate)
    return 0


if __name__ == "__main__":
    sys.exit(main())
