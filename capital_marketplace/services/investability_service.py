# capital_marketplace/services/investability_service.py
"""
Investability scoring

Score breakdown (max 100):
- KYC verified: 30 points
- Financials linked: 20 points
- Documents uploaded: 5 points per document, max 25 (5 documents)
- Revenue: 0-25 points, linear from $0 to $1M, capped above $1M

Usage:
    service = InvestabilityService(CompanyStore(db))
    result = service.calculate_score(company_id)

    coordinator = ScoreChangeCoordinator(service)
    coordinator.subscribe(lambda company_id, score: ...)
    coordinator.on_company_data_change(company_id)
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List, Optional
from uuid import UUID

from capital_marketplace.core.logger import get_logger
from capital_marketplace.models import Company
from capital_marketplace.services.store import CompanyStore

logger = get_logger(__name__)

KYC_POINTS = 30
FINANCIALS_POINTS = 20
POINTS_PER_DOCUMENT = 5
MAX_SCORED_DOCUMENTS = 5
MAX_DOCUMENT_POINTS = POINTS_PER_DOCUMENT * MAX_SCORED_DOCUMENTS
MAX_REVENUE_POINTS = 25
REVENUE_CAP = 1_000_000
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 away from zero (12.5 -> 13)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ScoreBreakdown:
    kyc_verified: int
    financials_linked: int
    documents_uploaded: int
    revenue_score: int

    @property
    def total(self) -> int:
        return self.kyc_verified + self.financials_linked + self.documents_uploaded + self.revenue_score

    def to_dict(self) -> Dict[str, int]:
        return {
            "kycVerified": self.kyc_verified,
            "financialsLinked": self.financials_linked,
            "documentsUploaded": self.documents_uploaded,
            "revenueScore": self.revenue_score,
        }


@dataclass(frozen=True)
class InvestabilityScore:
    score: int
    breakdown: ScoreBreakdown

    def to_dict(self) -> Dict[str, object]:
        return {"score": self.score, "breakdown": self.breakdown.to_dict()}


def calculate_revenue_score(revenue: float) -> int:
    """Linear 0-25 points for $0-$1M revenue; 25 above $1M."""
    if revenue >= REVENUE_CAP:
        return MAX_REVENUE_POINTS
    return round_half_up(max(revenue, 0) / REVENUE_CAP * MAX_REVENUE_POINTS)


def calculate_score(company: Company, document_count: int) -> InvestabilityScore:
    """Score a company from its current flags, revenue and document count."""
    breakdown = ScoreBreakdown(
        kyc_verified=KYC_POINTS if company.kyc_verified else 0,
        financials_linked=FINANCIALS_POINTS if company.financials_linked else 0,
        documents_uploaded=min(document_count * POINTS_PER_DOCUMENT, MAX_DOCUMENT_POINTS),
        revenue_score=calculate_revenue_score(company.revenue),
    )
    return InvestabilityScore(score=min(breakdown.total, MAX_SCORE), breakdown=breakdown)


def get_recommendations(company: Company, document_count: int) -> List[str]:
    """Improvement checklist, in fixed order. Empty for a fully optimized company."""
    recommendations = []

    if not company.kyc_verified:
        recommendations.append(f"Complete KYC verification to earn {KYC_POINTS} points")

    if not company.financials_linked:
        recommendations.append(f"Link your bank account to earn {FINANCIALS_POINTS} points")

    if document_count < MAX_SCORED_DOCUMENTS:
        needed = MAX_SCORED_DOCUMENTS - document_count
        plural = "s" if needed > 1 else ""
        recommendations.append(f"Upload {needed} more document{plural} to maximize document points")

    if company.revenue < REVENUE_CAP:
        recommendations.append("As your revenue grows, your score will automatically improve")

    return recommendations


class InvestabilityService:
    """Loads company state from the store and scores it."""

    def __init__(self, store: CompanyStore):
        self.store = store

    def calculate_score(self, company_id: UUID) -> InvestabilityScore:
        """
        Raises:
            NotFoundError: If the company does not exist
            TransientStoreError: If the store is unavailable
        """
        company = self.store.get_company(company_id)
        document_count = self.store.count_documents_for_company(company_id)
        return calculate_score(company, document_count)

    def get_recommendations(self, company_id: UUID) -> List[str]:
        company = self.store.get_company(company_id)
        document_count = self.store.count_documents_for_company(company_id)
        return get_recommendations(company, document_count)


ScoreChangeHandler = Callable[[UUID, InvestabilityScore], None]


class ScoreChangeCoordinator:
    """
    Single hook run after any committed mutation that can move a company's score.

    Recomputes the score, logs it, then calls each subscribed handler with
    (company_id, score). Nothing is persisted here.
    """

    def __init__(
        self,
        investability: InvestabilityService,
        handlers: Optional[Iterable[ScoreChangeHandler]] = None,
    ):
        self.investability = investability
        self._handlers: List[ScoreChangeHandler] = list(handlers or [])

    def subscribe(self, handler: ScoreChangeHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: ScoreChangeHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    @property
    def handlers(self) -> List[ScoreChangeHandler]:
        return list(self._handlers)

    def on_company_data_change(self, company_id: UUID) -> None:
        score = self.investability.calculate_score(company_id)
        logger.info(f"Score updated for company {company_id}: {score.score}")

        for handler in self._handlers:
            try:
                handler(company_id, score)
            except Exception as e:
                logger.error(
                    f"Score change handler {getattr(handler, '__name__', handler)} failed: {e}",
                    exc_info=True,
                )
