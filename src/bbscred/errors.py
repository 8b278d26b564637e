class BBSCredError(Exception):
    """
    Base class for all bbscred errors.

    This exception serves as the root of the bbscred error hierarchy.
    """
    pass


class InvalidParameterError(BBSCredError, ValueError):
    """
    Raised when a provided parameter is invalid or malformed.

    This indicates that the arguments passed to a function do not meet
    the expected criteria or format.
    """
    pass


class InvalidLengthError(InvalidParameterError):
    """
    Raised when a byte string or requested output length is out of range.

    Examples include an `expand_message` output longer than 65535 bytes or
    an encoded point of the wrong size.
    """
    pass


class InvalidPointError(BBSCredError, ValueError):
    """
    Raised when an elliptic-curve point fails validation.

    The point may be off-curve, carry inconsistent encoding flags, or have
    coordinates outside the base field.
    """
    pass


class InvalidInfinityError(InvalidPointError):
    """
    Raised when the point at infinity is improperly encoded.
    """
    pass


class SubgroupError(InvalidPointError):
    """
    Raised when a point is on the curve but not in the prime-order subgroup.
    """
    pass


class InvalidScalarError(BBSCredError, ValueError):
    """
    Raised when a scalar is outside [0, r), or zero where it must not be.
    """
    pass


class DivisionByZeroError(BBSCredError, ZeroDivisionError):
    """
    Raised when inverting the zero element of a field.
    """
    pass


class NotASquareError(BBSCredError, ValueError):
    """
    Raised when a field element has no square root.
    """
    pass


class DegeneratePairingError(BBSCredError, ValueError):
    """
    Raised when a pairing is requested with the identity on either side.
    """
    pass


class InvalidSignatureError(BBSCredError):
    """
    Raised when signing produces a degenerate signature, or when signature
    octets cannot be decoded.
    """
    pass


class MalformedProofError(BBSCredError, ValueError):
    """
    Raised for proofs of the wrong size, proofs carrying identity points or
    out-of-range scalars, and disclosed indexes outside the message range.
    """
    pass


class UnknownCiphersuiteError(BBSCredError, ValueError):
    """
    Raised when a ciphersuite key, name or identifier is not recognised.
    """
    pass


class NotFoundError(BBSCredError):
    """
    Raised when a requested resource does not exist.

    Examples include looking up a credential under an unknown anonymous id.
    """
    pass


class IssuerNotInitializedError(BBSCredError):
    """
    Raised when an issuer is used before its key pair has been generated.
    """
    pass


class CredentialError(BBSCredError):
    """
    Raised for credential-layer failures.

    Attributes:
        anon_id: Optional anonymous identifier of the affected credential.
    """

    def __init__(self, message: str, anon_id: str | None = None):
        """
        Initialize a CredentialError.

        Args:
            message: Description of the error.
            anon_id: Optional anonymous id for reference.
        """
        super().__init__(message)
        self.anon_id = anon_id


# Convenience alias
CredentialNotFound = NotFoundError
