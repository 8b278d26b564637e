"""Defines the data structures and Pydantic models for bbscred.

This module contains the types exchanged between issuers, holders and
verifiers: key pairs, signed credentials, selective-disclosure
presentations and verification results. Binary values (keys, signatures,
proofs, headers) are carried as lowercase hex strings so every model
round-trips through JSON.
"""
from __future__ import annotations

import json
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .bbs.ciphersuites import get_ciphersuite


def _check_hex(value: str) -> str:
    try:
        bytes.fromhex(value)
    except ValueError:
        raise ValueError(f"not a hex string: {value[:16]!r}") from None
    return value.lower()


def _check_ciphersuite(value: str) -> str:
    return get_ciphersuite(value).key


class _JsonModel(BaseModel):
    """Shared canonical JSON helpers."""

    def to_json(self, *, indent: int | None = None) -> str:
        """Serializes the model to a canonical JSON string.

        Args:
            indent: If provided, formats the JSON with the specified indent level.

        Returns:
            A string containing the sorted, canonical JSON representation.
        """
        model_dict = self.model_dump(mode='json', exclude_none=True)
        return json.dumps(model_dict, indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, data: str):
        """Deserializes a model from a JSON string."""
        return cls.model_validate_json(data)


class KeyPair(_JsonModel):
    """A BBS key pair.

    Attributes:
        secret_key: The 32-byte big-endian secret scalar, hex encoded.
        public_key: The 96-byte compressed G2 public key, hex encoded.
        ciphersuite: Registry key of the ciphersuite the key is used with.
    """
    secret_key: str = Field(repr=False)
    public_key: str
    ciphersuite: str = "BLS12381_SHAKE256"

    @field_validator("secret_key", "public_key")
    @classmethod
    def check_hex(cls, value: str) -> str:
        return _check_hex(value)

    @field_validator("ciphersuite")
    @classmethod
    def check_ciphersuite(cls, value: str) -> str:
        return _check_ciphersuite(value)

    @property
    def secret_key_bytes(self) -> bytes:
        return bytes.fromhex(self.secret_key)

    @property
    def public_key_bytes(self) -> bytes:
        return bytes.fromhex(self.public_key)


class UserInfo(BaseModel):
    """Identity data submitted to an issuer.

    Attributes:
        name: Given name.
        surname: Family name.
        credit_score: Non-negative integer credit score.
        birthdate: Date of birth, free form (e.g. "1990-05-15").
        location: City or region.
        ssn: National identification number.
    """
    name: str
    surname: str
    credit_score: int
    birthdate: str
    location: str
    ssn: str


class Credential(_JsonModel):
    """A BBS-signed credential over labelled attribute messages.

    Each attribute is the UTF-8 message "label:value"; `attribute_labels[i]`
    names `attributes[i]`. The order is fixed at issuance.

    Attributes:
        signature: The 80-byte BBS signature, hex encoded.
        attributes: The signed messages in signing order.
        attribute_labels: Labels of the messages, same order.
        issuer_public_key: The issuer's compressed public key, hex encoded.
        issuer_name: Human-readable issuer name.
        issued_at: Issuance time in milliseconds since the epoch.
        anon_id: Anonymous identifier of the holder.
        ciphersuite: Registry key of the ciphersuite used to sign.
        header: The signature header, hex encoded.
    """
    signature: str
    attributes: List[str]
    attribute_labels: List[str]
    issuer_public_key: str
    issuer_name: str
    issued_at: int
    anon_id: str
    ciphersuite: str = "BLS12381_SHAKE256"
    header: str = ""

    @field_validator("signature", "issuer_public_key", "header")
    @classmethod
    def check_hex(cls, value: str) -> str:
        return _check_hex(value)

    @field_validator("ciphersuite")
    @classmethod
    def check_ciphersuite(cls, value: str) -> str:
        return _check_ciphersuite(value)

    @property
    def messages(self) -> List[bytes]:
        return [a.encode("utf-8") for a in self.attributes]

    def index_of(self, label: str) -> int:
        """Returns the position of `label`, raising KeyError if absent."""
        try:
            return self.attribute_labels.index(label)
        except ValueError:
            raise KeyError(label) from None


class IssuerInfo(_JsonModel):
    """Public description of an issuer.

    Attributes:
        name: Issuer name.
        public_key: Compressed public key (hex), None before initialisation.
        public_key_multibase: Multibase form of the public key.
        total_credentials_issued: Number of credentials in the issuer's store.
    """
    name: str
    public_key: Optional[str] = None
    public_key_multibase: Optional[str] = None
    total_credentials_issued: int = 0


class CredentialVerification(_JsonModel):
    """Result of checking a credential against its issuer key.

    Attributes:
        valid: Whether the signature verified.
        issuer: Issuer name, when known.
        anon_id: Anonymous id of the credential.
        reason: Why verification failed, if it did.
    """
    valid: bool
    issuer: Optional[str] = None
    anon_id: Optional[str] = None
    reason: Optional[str] = None


class Presentation(_JsonModel):
    """A selective-disclosure presentation derived from a credential.

    Attributes:
        proof: BBS proof octets, hex encoded.
        disclosed_indexes: Zero-based positions of the revealed messages.
        disclosed_messages: The revealed messages, same order as the indexes.
        disclosed_labels: Labels of the revealed messages, if known.
        issuer_public_key: Issuer public key the proof verifies against.
        header: Signature header, hex encoded.
        presentation_header: Presentation header bound into the proof.
        ciphersuite: Registry key of the ciphersuite.
    """
    proof: str
    disclosed_indexes: List[int]
    disclosed_messages: List[str]
    disclosed_labels: List[str] = Field(default_factory=list)
    issuer_public_key: str
    header: str = ""
    presentation_header: str = ""
    ciphersuite: str = "BLS12381_SHAKE256"

    @field_validator("proof", "issuer_public_key", "header", "presentation_header")
    @classmethod
    def check_hex(cls, value: str) -> str:
        return _check_hex(value)

    @field_validator("ciphersuite")
    @classmethod
    def check_ciphersuite(cls, value: str) -> str:
        return _check_ciphersuite(value)

    def disclosed(self) -> Dict[str, str]:
        """Maps "label:value" messages to {label: value}."""
        out: Dict[str, str] = {}
        for message in self.disclosed_messages:
            label, sep, value = message.partition(":")
            if sep:
                out[label] = value
        return out


class AgeCredential(_JsonModel):
    """A holder-side credential over ["age:N", "id:<anon>", "timestamp:<ms>"].

    Attributes:
        signature: The BBS signature, hex encoded.
        messages: The three signed messages.
        public_key: The signing key, hex encoded.
        anon_id: The anonymous id bound into the credential.
        ciphersuite: Registry key of the ciphersuite.
    """
    signature: str
    messages: List[str]
    public_key: str
    anon_id: str
    ciphersuite: str = "BLS12381_SHAKE256"

    @field_validator("signature", "public_key")
    @classmethod
    def check_hex(cls, value: str) -> str:
        return _check_hex(value)

    @field_validator("ciphersuite")
    @classmethod
    def check_ciphersuite(cls, value: str) -> str:
        return _check_ciphersuite(value)


class AgeVerification(_JsonModel):
    """Result of an age check.

    Attributes:
        valid: Whether the proof verified and any disclosed age passed.
        age_verified: Whether an age message was disclosed and checked.
        reason: Explanation when not verified.
    """
    valid: bool
    age_verified: bool = False
    reason: Optional[str] = None


__all__ = [
    "KeyPair", "UserInfo", "Credential", "IssuerInfo", "CredentialVerification",
    "Presentation", "AgeCredential", "AgeVerification",
]
