"""
End-to-end walk through the anonymous-credential flow.

An issuer signs a credential for a user, the holder reveals only the credit
category to a verifier, and then proves an age without revealing anything
else. Run after `pip install -e .`:

    python examples/credential_demo.py
"""
import json
import logging

from bbscred import BBSConfig, configure_logging
from bbscred.clients import CredentialHolder, CredentialIssuer, PresentationVerifier

logger = logging.getLogger("credential_demo")


def issue_and_present():
    """
    Issue one credential and verify a presentation that reveals only the credit category.
    """
    print("=" * 70)
    print("PART 1: Issue a credential and disclose the credit category")
    print("=" * 70)

    issuer = CredentialIssuer("Demo Identity Authority")
    issuer.init()
    print(json.dumps(issuer.get_issuer_info().model_dump(), indent=4))

    credential = issuer.issue_credential({
        "name": "John",
        "surname": "Doe",
        "credit_score": 750,
        "birthdate": "1990-05-15",
        "location": "New York",
        "ssn": "123-45-6789",
    })
    print(f"\nCredential issued for anonymous id {credential.anon_id[:16]}...")
    for label, attribute in zip(credential.attribute_labels, credential.attributes):
        print(f"    {label:<18} {attribute[len(label) + 1:][:40]}")

    holder = CredentialHolder()
    presentation = holder.present(credential, reveal=["creditCategory"], presentation_header=b"shop-nonce-001")
    print(f"\nDisclosed: {presentation.disclosed()}")
    print(f"Proof size: {len(presentation.proof) // 2} bytes")

    verifier = PresentationVerifier(trusted_issuers=[issuer.get_public_key()])
    accepted = verifier.check_credit_category(presentation, ["good", "excellent"])
    print(f"Credit category accepted: {'yes' if accepted else 'no'}")
    assert accepted, "A good credit category should be accepted"

    forged = presentation.model_copy(update={"disclosed_messages": ["creditCategory:excellent"]})
    rejected = not verifier.verify_presentation(forged)
    print(f"Forged disclosure rejected: {'yes' if rejected else 'no'}")
    assert rejected, "A forged disclosure must not verify"
    return credential.anon_id


def prove_age(anon_id):
    """
    Prove an age of at least 18 while keeping the id and timestamp hidden.
    """
    print("\n" + "=" * 70)
    print("PART 2: Age proof")
    print("=" * 70)

    holder = CredentialHolder()
    holder.init()
    presentation = holder.prove_age(34, anon_id, 18, presentation_header=b"bar-entry-42")
    result = PresentationVerifier().verify_age_proof(presentation, 18)
    print(json.dumps(result.model_dump(), indent=4))
    assert result.valid and result.age_verified


if __name__ == "__main__":
    configure_logging(BBSConfig.from_env())
    anon = issue_and_present()
    prove_age(anon)
    print("\nAll demo steps completed.")
