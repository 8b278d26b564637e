from typing import Dict, Iterator

from ..errors import NotFoundError
from ..types import Credential


class CredentialStore:
    """In-memory repository of issued credentials keyed by anonymous id.

    The store belongs to the issuer that writes to it; issuing again for the
    same anonymous id replaces the earlier credential.
    """

    def __init__(self) -> None:
        self._credentials: Dict[str, Credential] = {}

    def add(self, credential: Credential) -> None:
        self._credentials[credential.anon_id] = credential

    def get(self, anon_id: str) -> Credential:
        """
        Look up a credential.

        Raises:
            NotFoundError: If nothing was issued for `anon_id`.
        """
        try:
            return self._credentials[anon_id]
        except KeyError:
            raise NotFoundError(f"No credential issued for anonymous id {anon_id[:8]}...") from None

    def __contains__(self, anon_id: object) -> bool:
        return anon_id in self._credentials

    def __len__(self) -> int:
        return len(self._credentials)

    def __iter__(self) -> Iterator[Credential]:
        return iter(list(self._credentials.values()))

    def clear(self) -> None:
        self._credentials.clear()
