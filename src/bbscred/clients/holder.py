import logging
import time
from typing import List, Optional, Sequence, Union

from .. import api
from ..config import BBSConfig
from ..errors import CredentialError
from ..types import AgeCredential, Credential, KeyPair, Presentation
from .base_client import BaseClient

logger = logging.getLogger(__name__)

AGE_LABELS = ("age", "id", "timestamp")


class CredentialHolder(BaseClient):
    """Holds credentials and derives selective-disclosure presentations from them."""

    def __init__(
        self,
        *,
        config: Optional[BBSConfig] = None,
        ciphersuite: Optional[str] = None,
        seed: Optional[bytes] = None,
    ) -> None:
        """
        Initialize a CredentialHolder.

        Args:
            config: Shared settings.
            ciphersuite: Ciphersuite override used for age credentials.
            seed: Key material for a deterministic age-signing key.
        """
        super().__init__(config=config, ciphersuite=ciphersuite)
        self._seed = seed
        self._age_key: Optional[KeyPair] = None

    def init(self) -> KeyPair:
        """Generate the key that signs this holder's age credentials."""
        self._age_key = api.generate_key_pair(seed=self._seed, ciphersuite=self.ciphersuite)
        logger.info("Holder age-signing key generated")
        return self._age_key

    @property
    def age_key(self) -> KeyPair:
        if self._age_key is None:
            self.init()
        return self._age_key

    @staticmethod
    def _resolve_indexes(labels: Sequence[str], reveal: Sequence[Union[str, int]]) -> List[int]:
        indexes = []
        for item in reveal:
            if isinstance(item, int):
                if not 0 <= item < len(labels):
                    raise CredentialError(f"Attribute index {item} is out of range")
                indexes.append(item)
            else:
                try:
                    indexes.append(list(labels).index(item))
                except ValueError:
                    raise CredentialError(f"Unknown attribute label {item!r}") from None
        return sorted(set(indexes))

    def _derive(self, *, public_key: str, signature: str, header: str, messages: Sequence[str],
                labels: Sequence[str], reveal: Sequence[Union[str, int]], presentation_header: bytes,
                ciphersuite: str) -> Presentation:
        indexes = self._resolve_indexes(labels, reveal)
        started = time.perf_counter()
        proof = api.derive_proof(
            bytes.fromhex(public_key),
            bytes.fromhex(signature),
            bytes.fromhex(header),
            list(messages),
            presentation_header,
            indexes,
            ciphersuite,
        )
        logger.debug("derive_proof took %.3fs", time.perf_counter() - started)
        return Presentation(
            proof=proof.hex(),
            disclosed_indexes=indexes,
            disclosed_messages=[messages[i] for i in indexes],
            disclosed_labels=[labels[i] for i in indexes],
            issuer_public_key=public_key,
            header=header,
            presentation_header=presentation_header.hex(),
            ciphersuite=ciphersuite,
        )

    def present(self, credential: Credential, reveal: Sequence[Union[str, int]] = (),
                presentation_header: bytes = b"") -> Presentation:
        """
        Derive a presentation revealing only the selected attributes.

        Args:
            credential: A credential issued to this holder.
            reveal: Attribute labels (e.g. "creditCategory") or indexes to disclose.
            presentation_header: Verifier-supplied context such as a nonce.

        Returns:
            A Presentation carrying the proof and the disclosed messages.

        Raises:
            CredentialError: If a label or index does not exist.
        """
        presentation = self._derive(
            public_key=credential.issuer_public_key,
            signature=credential.signature,
            header=credential.header,
            messages=credential.attributes,
            labels=credential.attribute_labels,
            reveal=reveal,
            presentation_header=presentation_header,
            ciphersuite=credential.ciphersuite,
        )
        logger.info("Presentation created for anonymous id %s... disclosing %s",
                    credential.anon_id[:8], presentation.disclosed_labels)
        return presentation

    def create_age_credential(self, age: int, anon_id: str) -> AgeCredential:
        """
        Sign ["age:<age>", "id:<anon_id>", "timestamp:<ms>"] with the holder's age key.

        Returns:
            The signed AgeCredential.
        """
        key = self.age_key
        messages = [f"age:{age}", f"id:{anon_id}", f"timestamp:{int(time.time() * 1000)}"]
        signature = api.sign(key.secret_key_bytes, key.public_key_bytes, b"", messages, key.ciphersuite)
        return AgeCredential(
            signature=signature.hex(),
            messages=messages,
            public_key=key.public_key,
            anon_id=anon_id,
            ciphersuite=key.ciphersuite,
        )

    def prove_age(self, age: int, anon_id: str, min_age: int, presentation_header: bytes = b"") -> Presentation:
        """
        Create an age credential and a proof disclosing only the age message.

        Raises:
            CredentialError: If `age` is below `min_age`.
        """
        if age < min_age:
            raise CredentialError(f"Age {age} does not meet minimum requirement of {min_age}", anon_id=anon_id)
        credential = self.create_age_credential(age, anon_id)
        presentation = self._derive(
            public_key=credential.public_key,
            signature=credential.signature,
            header="",
            messages=credential.messages,
            labels=AGE_LABELS,
            reveal=[0],
            presentation_header=presentation_header,
            ciphersuite=credential.ciphersuite,
        )
        logger.info("Age proof created for anonymous id %s...", anon_id[:8])
        return presentation
