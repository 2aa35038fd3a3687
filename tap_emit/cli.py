"""CLI entry point for the TAP producer."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from tap_emit.sources.loading import available_source_keys, load_source_manifest


async def run(
    source_key: str,
    source_config_json: str = "{}",
    output_path: Path | None = None,
) -> int:
    """Emit a TAP document from the selected source and return exit code."""
    log = logging.getLogger("tap_emit")

    log.info("Loading source: %s", source_key)
    manifest = load_source_manifest(source_key)

    config_dict = json.loads(source_config_json)
    config = manifest.config_cls(**config_dict)
    source = manifest.source_factory(config)

    if output_path is None:
        exit_code = await source.emit(sys.stdout.buffer)
        sys.stdout.buffer.flush()
    else:
        log.info("Writing TAP to %s", output_path)
        with output_path.open("wb") as sink:
            exit_code = await source.emit(sink)

    log.info("Source %s finished with exit code %d", source_key, exit_code)
    return exit_code


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Produce TAP version 14 streams from test results"
    )
    parser.add_argument(
        "--source",
        help="Source key (see --list-sources)",
    )
    parser.add_argument(
        "--list-sources",
        action="store_true",
        help="Print the registered source keys and exit",
    )
    parser.add_argument(
        "--source-config",
        default="{}",
        help="JSON configuration for the source",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write TAP to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr diagnostics",
    )

    args = parser.parse_args()

    if args.list_sources:
        for key in available_source_keys():
            print(key)
        return
    if args.source is None:
        parser.error("--source is required")

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            source_key=args.source,
            source_config_json=args.source_config,
            output_path=args.output,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
