import logging
import time
from typing import Dict, Iterable, Optional, Union

from .. import api
from ..bbs.batch import BatchItem, batch_verify
from ..config import BBSConfig
from ..errors import InvalidParameterError, IssuerNotInitializedError
from ..types import Credential, CredentialVerification, IssuerInfo, KeyPair, UserInfo
from ..utils import crypto
from .base_client import BaseClient
from .store import CredentialStore

logger = logging.getLogger(__name__)

ATTRIBUTE_LABELS = (
    "anonId",
    "creditAccumulator",
    "creditCategory",
    "nameHash",
    "locationHash",
    "ssnHash",
    "nonce",
)


class CredentialIssuer(BaseClient):
    """Issues BBS-signed identity credentials carrying hashed and categorised attributes."""

    def __init__(
        self,
        issuer_name: Optional[str] = None,
        store: Optional[CredentialStore] = None,
        *,
        config: Optional[BBSConfig] = None,
        ciphersuite: Optional[str] = None,
        seed: Optional[bytes] = None,
    ) -> None:
        """
        Initialize a CredentialIssuer.

        Args:
            issuer_name: Display name; defaults to `config.issuer_name`.
            store: Repository for issued credentials; a fresh one by default.
            config: Shared settings.
            ciphersuite: Ciphersuite override.
            seed: Key material for a deterministic issuer key (tests, demos).
        """
        super().__init__(config=config, ciphersuite=ciphersuite)
        self.issuer_name = issuer_name or self._config.issuer_name
        self._store = store if store is not None else CredentialStore()
        self._seed = seed
        self._key_pair: Optional[KeyPair] = None

    @property
    def store(self) -> CredentialStore:
        return self._store

    def init(self) -> KeyPair:
        """
        Generate the issuer key pair.

        Returns:
            The new KeyPair.
        """
        logger.info("%s: initializing issuer key pair", self.issuer_name)
        self._key_pair = api.generate_key_pair(seed=self._seed, ciphersuite=self.ciphersuite)
        logger.info("%s: issuer key pair generated", self.issuer_name)
        return self._key_pair

    def _require_key_pair(self) -> KeyPair:
        if self._key_pair is None:
            raise IssuerNotInitializedError("Issuer not initialized. Call init() first.")
        return self._key_pair

    @staticmethod
    def generate_anonymous_id(name: str, surname: str, birthdate: str, location: str, ssn: str) -> Dict[str, str]:
        """
        Derive the anonymous id for a person.

        The identity string is hashed and used as an Ed25519 seed; the public key
        is the anonymous id, so the same person always maps to the same id.

        Returns:
            A dict with `anon_id`, `private_key` and `anon_id_multibase`.
        """
        return crypto.derive_anonymous_id(name, surname, birthdate, location, ssn)

    @staticmethod
    def get_credit_score_category(credit_score: int) -> str:
        """
        Map a credit score to its category.

        Raises:
            InvalidParameterError: If the score is negative or not an integer.
        """
        if isinstance(credit_score, bool) or not isinstance(credit_score, int):
            raise InvalidParameterError("Invalid credit score")
        if 0 <= credit_score <= 300:
            return "poor"
        if 301 <= credit_score <= 600:
            return "fair"
        if 601 <= credit_score <= 800:
            return "good"
        if credit_score >= 801:
            return "excellent"
        raise InvalidParameterError("Invalid credit score")

    def issue_credential(self, user_info: Union[UserInfo, dict]) -> Credential:
        """
        Issue a credential for a user.

        The exact credit score is never stored: the credential carries its
        category and an accumulator reference derived from it.

        Args:
            user_info: The user's identity data.

        Returns:
            The signed Credential, also recorded in the store.

        Raises:
            IssuerNotInitializedError: If init() has not been called.
            InvalidParameterError: If the credit score is invalid.
        """
        key_pair = self._require_key_pair()
        if not isinstance(user_info, UserInfo):
            user_info = UserInfo.model_validate(user_info)
        started = time.perf_counter()
        logger.info("%s: issuing credential", self.issuer_name)

        identity = self.generate_anonymous_id(
            user_info.name, user_info.surname, user_info.birthdate, user_info.location, user_info.ssn
        )
        anon_id = identity["anon_id"]
        category = self.get_credit_score_category(user_info.credit_score)
        accumulator_ref = crypto.hash_hex(f"credit_accumulator_{user_info.credit_score}_{anon_id}")[:16]

        values = (
            anon_id,
            accumulator_ref,
            category,
            crypto.hash_hex(f"{user_info.name}:{user_info.surname}"),
            crypto.hash_hex(user_info.location),
            crypto.hash_hex(user_info.ssn),
            crypto.random_nonce(16),
        )
        attributes = [f"{label}:{value}" for label, value in zip(ATTRIBUTE_LABELS, values)]

        signature = api.sign(
            key_pair.secret_key_bytes,
            key_pair.public_key_bytes,
            self.header,
            attributes,
            self.ciphersuite,
        )
        credential = Credential(
            signature=signature.hex(),
            attributes=attributes,
            attribute_labels=list(ATTRIBUTE_LABELS),
            issuer_public_key=key_pair.public_key,
            issuer_name=self.issuer_name,
            issued_at=int(time.time() * 1000),
            anon_id=anon_id,
            ciphersuite=self.ciphersuite.key,
            header=self.header.hex(),
        )
        self._store.add(credential)

        logger.info("%s: credential issued for anonymous id %s...", self.issuer_name, anon_id[:8])
        logger.debug("issue_credential took %.3fs", time.perf_counter() - started)
        return credential

    def verify_credential(self, credential: Credential) -> CredentialVerification:
        """
        Verify a credential's signature against the issuer key it names.

        Returns:
            CredentialVerification with `valid` set; failures carry a reason.
        """
        valid = api.verify_signature(
            bytes.fromhex(credential.issuer_public_key),
            bytes.fromhex(credential.signature),
            bytes.fromhex(credential.header),
            credential.attributes,
            credential.ciphersuite,
        )
        if not valid:
            logger.info("%s: credential verification failed", self.issuer_name)
            return CredentialVerification(valid=False, anon_id=credential.anon_id, reason="Invalid signature")
        return CredentialVerification(valid=True, issuer=self.issuer_name, anon_id=credential.anon_id)

    def verify_credentials(self, credentials: Iterable[Credential], workers: Optional[int] = None) -> bool:
        """
        Verify many credentials with one batched pairing check.

        Args:
            credentials: Credentials signed under this issuer's ciphersuite.
            workers: Process count for the Miller loops; defaults to
                `config.batch_workers`.

        Returns:
            True only if every credential verifies. An empty batch is False.
        """
        credentials = list(credentials)
        if any(c.ciphersuite != self.ciphersuite.key for c in credentials):
            logger.info("%s: batch rejected, mixed ciphersuites", self.issuer_name)
            return False
        items = [
            BatchItem(
                public_key=bytes.fromhex(c.issuer_public_key),
                signature=bytes.fromhex(c.signature),
                messages=tuple(c.attributes),
                header=bytes.fromhex(c.header),
            )
            for c in credentials
        ]
        workers = self._config.batch_workers if workers is None else workers
        started = time.perf_counter()
        valid = batch_verify(items, self.ciphersuite, workers=workers)
        logger.debug("batch_verify of %d credentials on %d worker(s) took %.3fs",
                     len(items), workers, time.perf_counter() - started)
        logger.info("%s: batch of %d credentials verified: %s", self.issuer_name, len(items), valid)
        return valid

    def get_public_key(self) -> bytes:
        """
        Return the issuer's compressed public key.

        Raises:
            IssuerNotInitializedError: If init() has not been called.
        """
        return self._require_key_pair().public_key_bytes

    def get_issuer_info(self) -> IssuerInfo:
        public_key = self._key_pair.public_key if self._key_pair else None
        return IssuerInfo(
            name=self.issuer_name,
            public_key=public_key,
            public_key_multibase=crypto.bbs_public_key_to_multibase(public_key) if public_key else None,
            total_credentials_issued=len(self._store),
        )
