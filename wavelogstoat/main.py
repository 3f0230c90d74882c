"""Command line entry point for WavelogStoat.

This module parses the command line, loads the INI configuration, and either
runs a one-off Wavelog connection test or starts the UDP listener that feeds
received contacts through the record pipeline into Wavelog.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from wavelogstoat import __version__
from wavelogstoat.adapters.udp import UDPListener
from wavelogstoat.adapters.wavelog import WavelogClient
from wavelogstoat.core.config import DEFAULT_CONFIG_FILE, Settings, load_settings
from wavelogstoat.core.exceptions import ConfigurationError, TransportError
from wavelogstoat.core.logging import configure_logging, log_error, log_info
from wavelogstoat.pipeline import RecordPipeline


EXAMPLE_CONFIG = """\
example config.ini:
  [wavelog]
  url = https://wavelog.example.com
  api_key = your-api-key
  station_profile_id = 1
  timeout = 5000

  [server]
  port = 2333
  verbose = true
"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="wavelogstoat",
        description="Lightweight QSO transport from WSJT-X and N1MM+ style loggers to Wavelog",
        epilog=EXAMPLE_CONFIG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("config_file", nargs="?", help="config file (default: config.ini)")
    ap.add_argument("-c", "--config", dest="config", help="use specified config file")
    ap.add_argument("-t", "--test", action="store_true", help="test Wavelog connection")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


async def run_connection_test(settings: Settings) -> bool:
    async with WavelogClient(settings) as client:
        try:
            await client.test_connection()
        except TransportError as e:
            log_error("wavelog_connection_test_failed", error=str(e))
            return False
    log_info("wavelog_connection_test_passed")
    return True


async def serve(settings: Settings) -> None:
    """Run the UDP listener until cancelled."""
    async with WavelogClient(settings) as client:
        pipeline = RecordPipeline(client, verbose=settings.server.verbose)
        listener = UDPListener(
            pipeline,
            host=settings.server.host,
            port=settings.server.port,
            max_workers=settings.server.max_workers,
            verbose=settings.server.verbose,
        )
        await listener.serve_forever()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config_file = args.config or args.config_file or DEFAULT_CONFIG_FILE

    try:
        settings = load_settings(config_file)
    except ConfigurationError as e:
        log_error("config_load_failed", error=str(e))
        return 1

    configure_logging(settings.server.log_file)

    if args.test:
        log_info("test_mode")
        return 0 if asyncio.run(run_connection_test(settings)) else 1

    log_info("starting", version=__version__, port=settings.server.port)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        log_info("shutdown")
    except OSError as e:
        log_error("udp_bind_failed", port=settings.server.port, error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
