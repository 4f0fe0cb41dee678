"""Fetch one ID in every wire format from the configured Snowizard servers."""

import logging
import os
import sys

from snowizard.client import create_client
from snowizard.codecs import WireFormat
from snowizard.errors import SnowizardError
from snowizard.settings import Settings


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    """Load settings, request an ID per format and write each to stdout."""
    _configure_logging()
    logger = logging.getLogger("snowizard-client")
    settings = Settings.load()

    for wire_format in WireFormat:
        with create_client(settings.hosts, settings.connect_timeout, wire_format) as client:
            logger.info(
                "Requesting ID",
                extra={"hosts": list(settings.hosts), "wire_format": wire_format.name},
            )
            try:
                new_id = client.next_id()
            except SnowizardError:
                logger.exception("Could not obtain an ID from Snowizard.")
                sys.exit(1)

        print(new_id)


if __name__ == "__main__":
    main()
