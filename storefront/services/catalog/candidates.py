"""Selection of candidate catalog ids for a user."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from storefront.services.catalog.identity import IdentityResolver
from storefront.services.clients.returns_client import ReturnsClient
from storefront.services.errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

MIN_CATALOG_ID_LENGTH = 4
MAX_CATALOG_ID_LENGTH = 20

# Served when no personalized candidates are available for the user.
FALLBACK_CATALOG_IDS: tuple[str, ...] = (
    "1119458", "3461848", "4663520", "1284242", "3582567", "5923065",
    "1822776", "6459587", "1485802", "2386881", "2392204", "3372467",
    "3372251", "6286760", "5476755", "2310673", "3467450", "1118824",
    "288006", "2384938", "702697", "1811163", "1117063", "3303733",
    "4814236", "6210856", "1356739", "2550124", "6007551", "948590",
    "3791774", "4620562", "2203218", "4464136", "6971579", "4788284",
    "4744551", "1291616", "6193887", "4980189", "5809988", "5201993",
    "2430417", "5577882", "1426249", "4101113", "1712957", "1541743",
    "5534257", "6112014", "5923513", "868236", "3345673", "5146198",
    "2625492", "2027289", "2640962", "6439198", "6108275", "2992955",
    "3057722", "5755986", "1291812", "1192347", "2293306", "2701154",
    "3581031", "6813522", "3325988", "5299199", "1654578", "3108521",
    "6126713", "5750663", "2224294", "3797002", "5941345", "4931527",
    "866360", "4165805", "735663", "4867500", "2857178", "4927656",
    "1853576", "2737669", "2862666", "2985518", "6614290", "3070648",
    "257281", "1837865", "1017035", "4701385", "137902", "2075198",
    "2035946", "2982793", "1604248", "5642809",
)


@dataclass(frozen=True)
class CandidateSelection:
    catalog_ids: list[str]
    is_live: bool


def validate_catalog_ids(catalog_ids: Iterable[str]) -> list[str]:
    """Keep non-empty ids whose length is within the accepted bounds."""
    valid: list[str] = []
    for catalog_id in catalog_ids:
        candidate = (catalog_id or "").strip()
        if MIN_CATALOG_ID_LENGTH <= len(candidate) <= MAX_CATALOG_ID_LENGTH:
            valid.append(candidate)
    return valid


class CandidateSourceSelector:
    """Chooses between returns-driven candidates and the static fallback list.

    Never raises: every failure along the way degrades to the fallback list.
    """

    def __init__(
        self,
        identity: IdentityResolver,
        returns: ReturnsClient,
        fallback_ids: Sequence[str] = FALLBACK_CATALOG_IDS,
    ) -> None:
        self.identity = identity
        self.returns = returns
        self.fallback_ids = tuple(fallback_ids)

    async def select(self, user_id: str) -> CandidateSelection:
        try:
            code = await self.identity.resolve_code(user_id)
        except NotFoundError as exc:
            logger.info("No returns code for user %s (%s); using fallback ids", user_id, exc)
            return self._fallback()
        except StoreError as exc:
            logger.warning("Identity lookup failed for user %s: %s", user_id, exc)
            return self._fallback()

        catalog_ids = await self.returns.fetch_catalog_ids_with_fallback(code)
        if not catalog_ids:
            logger.info("No returns candidates for user %s; using fallback ids", user_id)
            return self._fallback()

        return CandidateSelection(catalog_ids=list(catalog_ids), is_live=True)

    def _fallback(self) -> CandidateSelection:
        return CandidateSelection(catalog_ids=list(self.fallback_ids), is_live=False)
