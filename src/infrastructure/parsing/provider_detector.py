"""
Bank / E-wallet Provider Detector

Detects the payment provider mentioned in free text (receipt OCR output) and
suggests which of the user's accounts it belongs to.
"""

import logging
from typing import Optional, Sequence

from application.ports.provider_detector import IProviderDetector
from domain.entities.provider import ProviderPattern
from domain.entities.reference_data import Account

logger = logging.getLogger(__name__)


# First match wins, so order runs from most specific to least specific.
# Bank variants sharing a short code (BCA Syariah, blu by BCA) come before the
# parent bank, and e-wallets come before the banks they are topped up from:
# "Transfer via GoPay ke BCA" resolves to GoPay.
PROVIDER_CATALOG: tuple[ProviderPattern, ...] = (
    ProviderPattern("BCA Syariah", r"\bBCA\s*SYARIAH\b", ("bca syariah",)),
    ProviderPattern("blu by BCA Digital", r"\bBLU\s+BY\s+BCA\b|\bBCA\s+DIGITAL\b", ("blu",)),
    ProviderPattern(
        "Bank Syariah Indonesia",
        r"\bBSI\b|\bBANK\s+SYARIAH\s+INDONESIA\b",
        ("bsi", "syariah indonesia"),
    ),
    ProviderPattern("CIMB Niaga", r"\bCIMB(?:\s+NIAGA)?\b|\bOCTO\b", ("cimb", "niaga", "octo")),
    ProviderPattern("Bank Jago", r"\bJAGO\b", ("jago",)),
    ProviderPattern("SeaBank", r"\bSEA\s?BANK\b", ("seabank", "sea bank")),
    ProviderPattern("Jenius", r"\bJENIUS\b", ("jenius", "btpn")),
    ProviderPattern("GoPay", r"\bGO\s?-?PAY\b", ("gopay", "gojek")),
    ProviderPattern("OVO", r"\bOVO\b", ("ovo",)),
    ProviderPattern("ShopeePay", r"\bSHOPEE\s?PAY\b|\bSPAY\b", ("shopeepay", "shopee")),
    ProviderPattern("LinkAja", r"\bLINK\s?AJA\b", ("linkaja",)),
    ProviderPattern("DANA", r"\bDANA\b", ("dana",)),
    ProviderPattern(
        "BCA",
        r"\bBCA\b|\bBANK\s+CENTRAL\s+ASIA\b|\bKLIK\s?BCA\b|\bM-?BCA\b",
        ("bca",),
    ),
    ProviderPattern("Mandiri", r"\bMANDIRI\b|\bLIVIN\b", ("mandiri", "livin")),
    ProviderPattern("BRI", r"\bBRI\b|\bBRIMO\b|\bBANK\s+RAKYAT\s+INDONESIA\b", ("bri", "brimo")),
    ProviderPattern("BNI", r"\bBNI\b|\bBANK\s+NEGARA\s+INDONESIA\b", ("bni",)),
    ProviderPattern("BTN", r"\bBTN\b|\bBANK\s+TABUNGAN\s+NEGARA\b", ("btn",)),
    ProviderPattern("Danamon", r"\bDANAMON\b|\bD-?BANK\b", ("danamon",)),
    ProviderPattern("Permata", r"\bPERMATA(?:\s?BANK)?\b", ("permata",)),
    ProviderPattern("Maybank", r"\bMAYBANK\b", ("maybank",)),
    ProviderPattern("OCBC NISP", r"\bOCBC(?:\s+NISP)?\b|\bNISP\b", ("ocbc", "nisp")),
)


class ProviderDetector(IProviderDetector):
    """Detect bank / e-wallet providers from free text"""

    def __init__(self, catalog: Sequence[ProviderPattern] = PROVIDER_CATALOG):
        self.catalog = tuple(catalog)

    def find_pattern(self, text: Optional[str]) -> Optional[ProviderPattern]:
        """Return the first catalog entry matching anywhere in the text"""
        if not text:
            return None

        for provider in self.catalog:
            if provider.matches(text):
                return provider
        return None

    def detect(self, text: Optional[str]) -> Optional[str]:
        """
        Detect provider from text

        Returns:
            Display name of the first matching provider, or None
        """
        provider = self.find_pattern(text)
        if provider:
            logger.debug(f"[PROVIDER_DETECT] Detected: {provider.display_name}")
            return provider.display_name
        return None

    def suggest_account(
        self,
        provider_name: Optional[str],
        accounts: Sequence[Account]
    ) -> Optional[Account]:
        """
        Suggest the user's account for a detected provider

        An account matches when its name contains one of the provider's
        keywords or the provider name itself (case-insensitive). The first
        matching account in input order wins.

        Args:
            provider_name: Display name returned by detect()
            accounts: User accounts in display order

        Returns:
            Matching account or None
        """
        if not provider_name:
            return None

        provider = next(
            (p for p in self.catalog if p.display_name == provider_name),
            None
        )
        keywords = [k.lower() for k in provider.keywords] if provider else []
        provider_lower = provider_name.lower()

        for account in accounts:
            account_name = (account.name or "").lower()
            if any(keyword in account_name for keyword in keywords):
                return account
            if provider_lower in account_name:
                return account

        return None
