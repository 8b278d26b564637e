from typing import Any, Optional

from ..bbs.ciphersuites import Ciphersuite
from ..config import BBSConfig


class BaseClient:
    """Common functionality for all bbscred clients: configuration, ciphersuite and header."""

    def __init__(self, *, config: Optional[BBSConfig] = None, **overrides: Any) -> None:
        """
        Initialize the BaseClient.

        Args:
            config: Shared settings; defaults to `BBSConfig()`.
            **overrides: Individual BBSConfig fields taking precedence over
                `config`. None values are ignored.

        Raises:
            pydantic.ValidationError: If an override is invalid.
        """
        base = config or BBSConfig()
        updates = {k: v for k, v in overrides.items() if v is not None}
        self._config = BBSConfig(**{**base.model_dump(), **updates}) if updates else base

    @property
    def config(self) -> BBSConfig:
        return self._config

    @property
    def ciphersuite(self) -> Ciphersuite:
        return self._config.suite

    @property
    def header(self) -> bytes:
        return self._config.header_bytes
