"""Environment-driven configuration for Snowizard clients."""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from snowizard.codecs import WireFormat


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for client configuration."""

    hosts: tuple[str, ...]
    connect_timeout: float = 2.0
    wire_format: WireFormat = WireFormat.TEXT

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv reads a .env file from the working directory, so developers can keep
        the host list there without exporting variables globally.
        """
        load_dotenv(find_dotenv(usecwd=True))

        hosts = tuple(
            host.strip()
            for host in os.getenv("SNOWIZARD_HOSTS", "").split(",")
            if host.strip()
        )
        if not hosts:
            raise ValueError("SNOWIZARD_HOSTS is required but was not provided.")

        connect_timeout_raw = os.getenv("SNOWIZARD_CONNECT_TIMEOUT", "").strip() or "2"
        try:
            connect_timeout = float(connect_timeout_raw)
        except ValueError as exc:
            raise ValueError("SNOWIZARD_CONNECT_TIMEOUT must be a numeric value.") from exc
        if connect_timeout <= 0:
            raise ValueError("SNOWIZARD_CONNECT_TIMEOUT must be greater than zero.")

        wire_format_raw = os.getenv("SNOWIZARD_FORMAT", "").strip() or "text"
        try:
            wire_format = WireFormat.from_name(wire_format_raw)
        except ValueError as exc:
            raise ValueError(f"SNOWIZARD_FORMAT is invalid: {exc}") from exc

        return cls(
            hosts=hosts,
            connect_timeout=connect_timeout,
            wire_format=wire_format,
        )
