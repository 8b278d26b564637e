"""
bbscred configuration.

A single pydantic model holds the settings shared by the clients. Values
come from keyword arguments, a JSON document or BBSCRED_* environment
variables.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from pydantic import BaseModel, field_validator

from .bbs.ciphersuites import Ciphersuite, get_ciphersuite

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ENV_PREFIX = "BBSCRED_"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BBSConfig(BaseModel):
    """Settings shared by issuers, holders and verifiers.

    Attributes:
        ciphersuite: Ciphersuite registry key or identifier.
        issuer_name: Default issuer name.
        header: Signature header as a hex string.
        log_level: Level passed to `configure_logging`.
        batch_workers: Process count for batch verification.
    """
    ciphersuite: str = "BLS12381_SHAKE256"
    issuer_name: str = "Government Identity Authority"
    header: str = ""
    log_level: str = "INFO"
    batch_workers: int = 1

    @field_validator("ciphersuite")
    @classmethod
    def _known_ciphersuite(cls, value: str) -> str:
        return get_ciphersuite(value).key

    @field_validator("header")
    @classmethod
    def _hex_header(cls, value: str) -> str:
        bytes.fromhex(value)
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _valid_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return value

    @field_validator("batch_workers")
    @classmethod
    def _positive_workers(cls, value: int) -> int:
        if value < 1:
            raise ValueError("batch_workers must be at least 1")
        return value

    @property
    def suite(self) -> Ciphersuite:
        return get_ciphersuite(self.ciphersuite)

    @property
    def header_bytes(self) -> bytes:
        return bytes.fromhex(self.header)

    @classmethod
    def from_json(cls, data: str) -> "BBSConfig":
        return cls.model_validate_json(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "BBSConfig":
        """Loads configuration from a JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BBSConfig":
        """Reads BBSCRED_CIPHERSUITE, BBSCRED_ISSUER_NAME, BBSCRED_HEADER,
        BBSCRED_LOG_LEVEL and BBSCRED_BATCH_WORKERS; unset keys keep defaults.
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in env:
                values[name] = env[key]
        return cls.model_validate(values)


def configure_logging(level: Union[str, BBSConfig, None] = None, fmt: str = DEFAULT_LOG_FORMAT) -> None:
    """Configure stream logging for scripts and demos.

    Args:
        level: A level name, or a `BBSConfig` whose `log_level` is applied.
            Defaults to `BBSConfig().log_level`.
        fmt: Log record format.
    """
    if level is None:
        level = BBSConfig()
    if isinstance(level, BBSConfig):
        level = level.log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=fmt,
        handlers=[logging.StreamHandler()],
    )


__all__ = ["BBSConfig", "configure_logging", "DEFAULT_LOG_FORMAT"]
