"""
Partner Credential Store

Read-only table of partner credentials, built once per process from settings.
Lookups are case-insensitive on the partner key.
"""
import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from ..config import PartnerCredentialSettings, settings
from ..models.pipeline import PartnerCredential

logger = logging.getLogger(__name__)


class CredentialStore:
    """Immutable partner key -> credential mapping."""

    def __init__(self, credentials: Iterable[PartnerCredential]):
        table: Dict[str, PartnerCredential] = {}
        for credential in credentials:
            key = credential.partner_key.casefold()
            if key in table:
                raise ValueError(f"Duplicate partner key: {credential.partner_key}")
            table[key] = credential
        self._credentials: Mapping[str, PartnerCredential] = MappingProxyType(table)

    @classmethod
    def from_settings(cls, partner_credentials: Mapping[str, PartnerCredentialSettings]) -> "CredentialStore":
        return cls(
            PartnerCredential(
                partner_key=partner_key,
                partner_no=entry.partner_no,
                password=entry.password,
            )
            for partner_key, entry in partner_credentials.items()
        )

    def lookup(self, partner_key: str) -> Optional[PartnerCredential]:
        """
        Find a partner's credential.

        Args:
            partner_key: Partner identifier as submitted (any case)

        Returns:
            PartnerCredential, or None if the partner is unknown
        """
        if not partner_key:
            return None
        return self._credentials.get(partner_key.casefold())

    def __contains__(self, partner_key: str) -> bool:
        return self.lookup(partner_key) is not None

    def __len__(self) -> int:
        return len(self._credentials)


_credential_store: Optional[CredentialStore] = None


def get_credential_store() -> CredentialStore:
    """Get or create the process-wide credential store."""
    global _credential_store
    if _credential_store is None:
        _credential_store = CredentialStore.from_settings(settings.partner_credentials)
        logger.info(f"Credential store loaded with {len(_credential_store)} partners")
    return _credential_store


def reset_credential_store() -> None:
    """Drop the cached store so the next call rebuilds it. Tests only."""
    global _credential_store
    _credential_store = None
