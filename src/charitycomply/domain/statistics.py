"""Compliance statistics service.

Single entry point that turns an organization's stored records into the
score, breakdown, action items and trend shown on the dashboard and reports.
"""

import logging
from datetime import UTC, date, datetime, time
from typing import Optional

from charitycomply.database.base import Database
from charitycomply.domain.action_items import derive_action_items
from charitycomply.domain.aggregator import aggregate_scores
from charitycomply.domain.cache import NullStatisticsCache, StatisticsCache
from charitycomply.domain.entities import (
    CategoryBreakdown,
    ComplianceStatistics,
    CountryRisk,
    ScoreSnapshot,
)
from charitycomply.domain.errors import (
    FetchError,
    NotFoundError,
    ValidationError,
    organization_not_found,
)
from charitycomply.domain.scoring import score_fundraising, score_overseas, score_safeguarding
from charitycomply.domain.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from charitycomply.domain.trends import calculate_trend

logger = logging.getLogger(__name__)


def statistics_cache_kind(as_of: date) -> str:
    """Cache key kind for statistics computed as of a date."""
    return f"statistics:{as_of.isoformat()}"


class ComplianceStatisticsService:
    """Service computing compliance statistics for an organization."""

    def __init__(
        self,
        db: Database,
        cache: Optional[StatisticsCache] = None,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    ):
        """Initialize statistics service.

        Args:
            db: Database instance
            cache: Optional statistics cache; nothing is cached when omitted
            config: Scoring configuration
        """
        self.db = db
        self.cache = cache or NullStatisticsCache()
        self.config = config

    def lookup_country_risk(self, code: str) -> CountryRisk:
        """Resolve a country's risk classification.

        Codes missing from the risk table are treated as high risk with
        additional checks required.
        """
        code = (code or "").strip().upper()
        country = self.db.get_country(code) if code else None
        if country is None:
            logger.debug("No risk entry for country %r, treating as high risk", code)
            return CountryRisk.unknown(code)
        return country

    def compute_compliance_statistics(
        self, organization_id: int, as_of: Optional[date] = None
    ) -> ComplianceStatistics:
        """Compute statistics for an organization.

        Args:
            organization_id: Organization to score
            as_of: Date the computation reflects (defaults to today). DBS
                expiry is judged against it and the trend compares with the
                latest snapshot captured before it.

        Returns:
            ComplianceStatistics

        Raises:
            NotFoundError: If organization doesn't exist
            FetchError: If any record set could not be read
        """
        as_of = as_of or date.today()
        kind = statistics_cache_kind(as_of)

        cached = self.cache.get(organization_id, kind)
        if cached is not None:
            logger.debug("Using cached statistics for organization %s", organization_id)
            return cached

        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))

        try:
            safeguarding_records = self.db.list_safeguarding_records(
                organization_id, include_inactive=False
            )
            overseas_activities = self.db.list_overseas_activities(organization_id)
            income_records = self.db.list_income_records(organization_id)
            snapshot = self.db.get_latest_score_snapshot(
                organization_id, before=datetime.combine(as_of, time.min, tzinfo=UTC)
            )
        except FetchError:
            logger.error(
                "Compliance statistics for organization %s not computed: record fetch failed",
                organization_id,
            )
            raise

        safeguarding = score_safeguarding(safeguarding_records, as_of, self.config)
        overseas = score_overseas(overseas_activities, self.lookup_country_risk, self.config)
        fundraising = score_fundraising(income_records, self.config)

        overall = aggregate_scores(
            safeguarding.score, overseas.score, fundraising.score, self.config
        )
        statistics = ComplianceStatistics(
            organization_id=organization_id,
            as_of=as_of,
            overall=overall,
            breakdown=CategoryBreakdown(
                safeguarding=safeguarding.score,
                overseas=overseas.score,
                fundraising=fundraising.score,
            ),
            action_items=tuple(derive_action_items([safeguarding, overseas, fundraising])),
            trends=calculate_trend(overall.percentage, snapshot),
        )
        logger.info(
            "Organization %s scored %s%% (%s) as of %s",
            organization_id,
            overall.percentage,
            overall.grade.value,
            as_of.isoformat(),
        )

        self.cache.set(organization_id, kind, statistics)
        return statistics

    def record_snapshot(
        self, organization_id: int, captured_at: Optional[datetime] = None
    ) -> ScoreSnapshot:
        """Compute the current overall score and persist it as a snapshot.

        Args:
            organization_id: Organization to snapshot
            captured_at: Snapshot time (defaults to now, UTC)

        Returns:
            The stored ScoreSnapshot
        """
        captured_at = captured_at or datetime.now(UTC)
        statistics = self.compute_compliance_statistics(
            organization_id, as_of=captured_at.date()
        )
        snapshot_id = self.db.create_score_snapshot(
            organization_id, statistics.overall.percentage, captured_at=captured_at
        )
        self.cache.invalidate(organization_id)
        logger.info(
            "Recorded score snapshot %s for organization %s: %s%%",
            snapshot_id,
            organization_id,
            statistics.overall.percentage,
        )
        return ScoreSnapshot(
            id=snapshot_id,
            organization_id=organization_id,
            overall_score=statistics.overall.percentage,
            captured_at=captured_at,
        )

    def get_score_history(
        self, organization_id: int, limit: Optional[int] = None
    ) -> list[ScoreSnapshot]:
        """List snapshots newest first.

        Raises:
            NotFoundError: If organization doesn't exist
            ValidationError: If limit is not positive
        """
        if limit is not None and limit <= 0:
            raise ValidationError("Limit must be a positive number")
        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))
        return self.db.list_score_snapshots(organization_id, limit=limit)
