import logging
import time
from typing import Iterable, Optional, Union

from .. import api
from ..config import BBSConfig
from ..types import AgeVerification, Presentation
from .base_client import BaseClient

logger = logging.getLogger(__name__)


class PresentationVerifier(BaseClient):
    """Checks presentations and the predicates that can be read from their disclosed messages."""

    def __init__(
        self,
        trusted_issuers: Optional[Iterable[Union[bytes, str]]] = None,
        *,
        config: Optional[BBSConfig] = None,
    ) -> None:
        """
        Initialize a PresentationVerifier.

        Args:
            trusted_issuers: Issuer public keys (bytes or hex) to accept; any
                issuer is accepted when None.
            config: Shared settings.
        """
        super().__init__(config=config)
        self._trusted = None
        if trusted_issuers is not None:
            self._trusted = {k.hex() if isinstance(k, bytes) else k.lower() for k in trusted_issuers}

    def verify_presentation(self, presentation: Presentation) -> bool:
        """
        Verify the proof of a presentation.

        Returns:
            True if the issuer is trusted and the proof verifies for the
            disclosed messages.
        """
        if self._trusted is not None and presentation.issuer_public_key not in self._trusted:
            logger.info("Presentation rejected: untrusted issuer")
            return False
        started = time.perf_counter()
        valid = api.verify_proof(
            bytes.fromhex(presentation.issuer_public_key),
            bytes.fromhex(presentation.proof),
            bytes.fromhex(presentation.header),
            bytes.fromhex(presentation.presentation_header),
            presentation.disclosed_messages,
            presentation.disclosed_indexes,
            presentation.ciphersuite,
        )
        logger.debug("verify_proof took %.3fs", time.perf_counter() - started)
        logger.info("Presentation verification result: %s", valid)
        return valid

    def verify_age_proof(self, presentation: Presentation, min_age: int) -> AgeVerification:
        """
        Verify an age presentation and check the disclosed age.

        Returns:
            AgeVerification; `age_verified` is False when no age was disclosed.
        """
        if not self.verify_presentation(presentation):
            return AgeVerification(valid=False, reason="Invalid proof signature")

        for message in presentation.disclosed_messages:
            if message.startswith("age:"):
                try:
                    age = int(message.split(":", 1)[1])
                except ValueError:
                    return AgeVerification(valid=False, reason="Malformed age message")
                if age >= min_age:
                    logger.info("Age verification successful")
                    return AgeVerification(valid=True, age_verified=True)
                return AgeVerification(valid=False, reason=f"Age {age} is below minimum {min_age}")

        return AgeVerification(valid=True, age_verified=False, reason="Age not revealed in proof")

    def check_credit_category(self, presentation: Presentation, accepted: Iterable[str]) -> bool:
        """
        Check that a verified presentation discloses an accepted credit category.

        Returns:
            False if the proof fails, the category is hidden, or it is not in `accepted`.
        """
        if not self.verify_presentation(presentation):
            return False
        category = presentation.disclosed().get("creditCategory")
        if category is None:
            logger.info("Credit category not revealed in presentation")
            return False
        return category in set(accepted)
