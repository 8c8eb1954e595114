"""
Domain Entity: Provider Pattern
One row of the ordered bank/e-wallet rule table
"""

import re
from dataclasses import dataclass, field
from functools import cached_property


@dataclass(frozen=True)
class ProviderPattern:
    """Bank or e-wallet recognized by a regex, plus account-name keywords"""

    display_name: str
    pattern: str
    keywords: tuple[str, ...] = field(default_factory=tuple)

    @cached_property
    def regex(self) -> re.Pattern:
        return re.compile(self.pattern, re.IGNORECASE)

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None
