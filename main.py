"""rotlog demo: writes synthetic log entries through a rotating file logger."""

import argparse
import logging
import random
import signal
import sys
import time
import uuid

from rotlog.config import load_config, load_yaml_config
from rotlog.errors import ConfigError, IOFailure, UnsupportedOperation
from rotlog.levels import Level
from rotlog.logger import Logger

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [rotlog] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_running = True


def _signal_handler(sig, _frame):
    global _running
    logger.info("Shutdown signal received (signal %d), stopping...", sig)
    _running = False


LEVELS = [Level.INFO, Level.INFO, Level.INFO, Level.INFO, Level.DEBUG, Level.WARN, Level.ERROR]
SERVICES = ["auth-api", "order-svc", "payment-gw", "user-svc", "catalog-api"]
MESSAGES = {
    Level.INFO: [
        "Request processed successfully",
        "Health check passed",
        "Cache hit for user session",
        "Database query completed in 12ms",
    ],
    Level.DEBUG: [
        "Entering request handler",
        "Parsed request body",
        "Token validation started",
    ],
    Level.WARN: [
        "Slow query detected (>500ms)",
        "Connection pool nearing capacity",
    ],
    Level.ERROR: [
        "Failed to connect to database",
        "Timeout waiting for upstream response",
    ],
}


def generate_entry() -> tuple[Level, str]:
    level = random.choice(LEVELS)
    service = random.choice(SERVICES)
    req_id = uuid.uuid4().hex[:8]
    return level, f"[{service}] [{req_id}] {random.choice(MESSAGES[level])}"


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Write demo log entries with rotation")
    parser.add_argument("--config", default=None,
                        help="Path to YAML config file (env vars take precedence)")
    parser.add_argument("--interval", type=float, default=0.05,
                        help="Seconds between entries (default: 0.05)")
    parser.add_argument("--count", type=int, default=0,
                        help="Stop after N entries (default: run until interrupted)")
    parser.add_argument("--tail", type=int, default=0, metavar="N",
                        help="Print the last N lines on shutdown")
    return parser


def main():
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    args = build_cli_parser().parse_args()
    try:
        config = load_config(load_yaml_config(args.config))
        log = Logger(config)
    except (ConfigError, IOFailure) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info(
        "Config: level=%s, output=%s, path=%s, max_size=%dKB, max_backups=%d",
        config.level, config.output, config.path, config.max_size_kb, config.max_backups,
    )

    entries_written = 0
    with log:
        while _running and (args.count <= 0 or entries_written < args.count):
            level, message = generate_entry()
            log.log(level, message)
            entries_written += 1
            time.sleep(args.interval)

        if args.tail > 0:
            try:
                for line in log.tail(args.tail):
                    print(line)
            except (UnsupportedOperation, IOFailure) as e:
                logger.error("Cannot tail: %s", e)

    logger.info("Shut down cleanly. Total entries generated: %d", entries_written)


if __name__ == "__main__":
    main()
