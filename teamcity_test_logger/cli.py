"""CLI entry point for the TeamCity test logger."""

import argparse
import json
import logging
import sys
from collections.abc import Iterable
from contextlib import ExitStack
from pathlib import Path

from teamcity_test_logger.event_stream import dispatch_events
from teamcity_test_logger.registration.loading import load_logger_manifest


def write_line(line: str) -> None:
    """Write a service message line to stdout immediately."""
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run(logger_key: str, logger_config_json: str, events: Iterable[str]) -> int:
    """Report the events and return exit code."""
    log = logging.getLogger("teamcity_test_logger")

    log.info("Loading logger: %s", logger_key)
    manifest = load_logger_manifest(logger_key)

    config_dict = json.loads(logger_config_json)
    config = manifest.config_cls(**config_dict)

    logger = manifest.logger_factory(config, write_line)
    completed = dispatch_events(events, logger)

    if not completed:
        log.error("Test run did not report completion")
        return 1

    log.info("Test run reported to %s", manifest.friendly_name)
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Report a test event stream as TeamCity service messages"
    )
    parser.add_argument(
        "--logger",
        default="TeamCity",
        help="Logger friendly name, extension URI or entry point name",
    )
    parser.add_argument(
        "--logger-config",
        default="{}",
        help="JSON configuration for the logger",
    )
    parser.add_argument(
        "--events",
        default="-",
        help="Path to a JSON-lines event file, or '-' for stdin",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    with ExitStack() as stack:
        if args.events == "-":
            events: Iterable[str] = sys.stdin
        else:
            events = stack.enter_context(Path(args.events).open(encoding="utf-8"))

        exit_code = run(
            logger_key=args.logger,
            logger_config_json=args.logger_config,
            events=events,
        )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
