"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from typing import Optional

import dotenv


@dataclass(frozen=True)
class LedgerSettings:
    """Settings resolved once when the ledger is wired.

    Attributes:
        principal_account_id: Bank account debited when USD income landing in
            a shared account is converted to CUP.
    """

    principal_account_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        raw_principal = os.getenv("LEDGER_PRINCIPAL_ACCOUNT_ID", "").strip()
        return cls(principal_account_id=raw_principal or None)


__all__ = ["LedgerSettings"]
