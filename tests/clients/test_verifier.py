# tests/clients/test_verifier.py
import pytest

from bbscred.clients import CredentialHolder, CredentialIssuer, PresentationVerifier

USER = {
    "name": "Bob",
    "surname": "Jones",
    "credit_score": 450,
    "birthdate": "1975-11-30",
    "location": "Denver",
    "ssn": "222-33-4444",
}


@pytest.fixture(scope="module")
def issuer():
    issuer = CredentialIssuer("Verifier Test Issuer", seed=b"\x05" * 32)
    issuer.init()
    return issuer


@pytest.fixture(scope="module")
def holder():
    holder = CredentialHolder(seed=b"\x06" * 32)
    holder.init()
    return holder


@pytest.fixture(scope="module")
def presentation(issuer, holder):
    credential = issuer.issue_credential(USER)
    return holder.present(credential, reveal=["creditCategory"], presentation_header=b"challenge-42")


@pytest.fixture(scope="module")
def age_presentation(holder):
    return holder.prove_age(30, "abc123", 18)


class TestVerifyPresentation:

    def test_valid(self, presentation):
        assert PresentationVerifier().verify_presentation(presentation)

    def test_trusted_issuers(self, issuer, presentation):
        trusted = PresentationVerifier(trusted_issuers=[issuer.get_public_key()])
        assert trusted.verify_presentation(presentation)
        trusted_hex = PresentationVerifier(trusted_issuers=[issuer.get_public_key().hex().upper()])
        assert trusted_hex.verify_presentation(presentation)

    def test_untrusted_issuer(self, presentation):
        verifier = PresentationVerifier(trusted_issuers=["00" * 96])
        assert not verifier.verify_presentation(presentation)

    def test_tampered_disclosure(self, presentation):
        forged = presentation.model_copy(update={"disclosed_messages": ["creditCategory:excellent"]})
        assert not PresentationVerifier().verify_presentation(forged)

    def test_replayed_with_other_header(self, presentation):
        replayed = presentation.model_copy(update={"presentation_header": b"challenge-43".hex()})
        assert not PresentationVerifier().verify_presentation(replayed)

    @pytest.mark.parametrize("update", [
        {"ciphersuite": "bogus"},
        {"disclosed_indexes": ["2"]},
        {"disclosed_indexes": [2.0]},
        {"disclosed_messages": [None]},
    ])
    def test_malformed_fields_are_rejected(self, presentation, update):
        """Unvalidated fields from the wire make verification fail, not raise"""
        malformed = presentation.model_copy(update=update)
        assert not PresentationVerifier().verify_presentation(malformed)

    def test_malformed_age_presentation(self, age_presentation):
        malformed = age_presentation.model_copy(update={"ciphersuite": "bogus"})
        result = PresentationVerifier().verify_age_proof(malformed, 18)
        assert not result.valid
        assert result.reason == "Invalid proof signature"


class TestCreditCategory:

    def test_accepted(self, presentation):
        assert PresentationVerifier().check_credit_category(presentation, ["fair", "good"])

    def test_not_accepted(self, presentation):
        assert not PresentationVerifier().check_credit_category(presentation, ["excellent"])

    def test_category_hidden(self, issuer, holder):
        credential = issuer.issue_credential(USER)
        hidden = holder.present(credential, reveal=["anonId"])
        assert not PresentationVerifier().check_credit_category(hidden, ["fair"])


class TestAgeVerification:

    def test_age_meets_minimum(self, age_presentation):
        result = PresentationVerifier().verify_age_proof(age_presentation, 21)
        assert result.valid
        assert result.age_verified

    def test_age_below_minimum(self, age_presentation):
        result = PresentationVerifier().verify_age_proof(age_presentation, 40)
        assert not result.valid
        assert result.reason == "Age 30 is below minimum 40"

    def test_age_not_revealed(self, holder):
        credential = holder.create_age_credential(30, "abc123")
        presentation = holder._derive(
            public_key=credential.public_key,
            signature=credential.signature,
            header="",
            messages=credential.messages,
            labels=("age", "id", "timestamp"),
            reveal=[1],
            presentation_header=b"",
            ciphersuite=credential.ciphersuite,
        )
        result = PresentationVerifier().verify_age_proof(presentation, 18)
        assert result.valid
        assert not result.age_verified
        assert result.reason == "Age not revealed in proof"

    def test_invalid_proof(self, age_presentation):
        forged = age_presentation.model_copy(update={"disclosed_messages": ["age:99"]})
        result = PresentationVerifier().verify_age_proof(forged, 18)
        assert not result.valid
        assert result.reason == "Invalid proof signature"
