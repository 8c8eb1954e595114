"""
Port: Provider Detector Interface
Defines contract for recognizing banks / e-wallets in text and mapping them to user accounts
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from domain.entities.reference_data import Account


class IProviderDetector(ABC):
    """Interface for payment provider detection"""

    @abstractmethod
    def detect(self, text: Optional[str]) -> Optional[str]:
        """
        Detect the payment provider named in text

        Args:
            text: Free text (receipt OCR output, transaction description)

        Returns:
            Provider display name, or None if no provider is recognized
        """
        pass

    @abstractmethod
    def suggest_account(
        self,
        provider_name: Optional[str],
        accounts: Sequence[Account]
    ) -> Optional[Account]:
        """
        Pick the user's account that belongs to a provider

        Args:
            provider_name: Display name returned by detect()
            accounts: User accounts in display order

        Returns:
            Matching account or None
        """
        pass
