# capital_marketplace/services/providers.py
"""
Mock identity-verification and bank-linking providers.

Stand-ins for the Persona and Plaid APIs. They never make network calls.
"""
from typing import Any, Dict, List, Optional
from uuid import UUID

from capital_marketplace.core.logger import get_logger
from capital_marketplace.utils.datetime_utils import get_utc_now, to_iso_string

logger = get_logger(__name__)

FAILING_INQUIRY_PREFIX = "inq_fail"


class MockIdentityProvider:
    """Identity verification: inquiries pass unless their id starts with `inq_fail`."""

    def __init__(self, environment: str = "sandbox"):
        self.environment = environment

    def verify_inquiry(self, inquiry_id: str) -> bool:
        passed = not inquiry_id.startswith(FAILING_INQUIRY_PREFIX)
        logger.info(f"Identity inquiry {inquiry_id} ({self.environment}): {'passed' if passed else 'failed'}")
        return passed


class MockBankingProvider:
    """Bank linking: any non-empty public token links successfully."""

    def __init__(self, environment: str = "sandbox"):
        self.environment = environment

    def link(self, plaid_token: str, account_id: Optional[str] = None) -> bool:
        return len(plaid_token) > 0

    def unlink(self, company_id: UUID) -> None:
        logger.info(f"Unlinking bank accounts for company {company_id}")

    def get_accounts(self, company_id: UUID) -> List[Dict[str, Any]]:
        return [
            {
                "id": "account_123",
                "name": "Business Checking",
                "type": "depository",
                "subtype": "checking",
                "balances": {"available": 25000.50, "current": 25000.50},
            },
            {
                "id": "account_456",
                "name": "Business Savings",
                "type": "depository",
                "subtype": "savings",
                "balances": {"available": 100000.00, "current": 100000.00},
            },
        ]

    def get_summary(self, company_id: UUID) -> Dict[str, Any]:
        return {
            "totalBalance": 125000.50,
            "monthlyRevenue": 45000,
            "monthlyExpenses": 32000,
            "averageBalance": 118000,
            "accountCount": 2,
            "lastUpdated": to_iso_string(get_utc_now()),
            "trends": {
                "revenueGrowth": 0.12,
                "expenseRatio": 0.71,
            },
        }
