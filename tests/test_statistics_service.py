"""Tests for the compliance statistics service."""

import json
import pytest
from datetime import date, datetime, UTC
from decimal import Decimal
from sqlalchemy.exc import OperationalError

from charitycomply.domain.cache import InMemoryStatisticsCache
from charitycomply.domain.entities import Grade, Priority, RiskLevel, TrendDirection
from charitycomply.domain.errors import FetchError, NotFoundError, ValidationError
from charitycomply.domain.income import IncomeService
from charitycomply.domain.overseas import CountryService
from charitycomply.domain.statistics import ComplianceStatisticsService, statistics_cache_kind

AS_OF = date(2025, 6, 1)


class TestComputeComplianceStatistics:
    """Tests for compute_compliance_statistics."""

    def test_end_to_end_example(self, statistics_service, scored_organization):
        """Example organization scores 84, grade B."""
        stats = statistics_service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)

        assert stats.breakdown.safeguarding.percentage == 70
        assert stats.breakdown.overseas.percentage == 85
        assert stats.breakdown.fundraising.percentage == 100
        assert stats.overall.percentage == 84
        assert stats.overall.grade == Grade.B
        assert stats.overall.level == "Good"
        assert stats.as_of == AS_OF

        high = [(i.code, i.count) for i in stats.action_items if i.priority == Priority.HIGH]
        assert high == [("dbs_expired", 1), ("unapproved_high_risk", 1)]

    def test_organization_without_records(self, statistics_service, sample_organization):
        stats = statistics_service.compute_compliance_statistics(sample_organization.id, as_of=AS_OF)

        assert stats.overall.percentage == 0
        assert stats.overall.level == "Not Started"
        assert stats.breakdown.safeguarding.level == "Not Started"
        assert stats.breakdown.overseas.level == "Not Started"
        assert stats.breakdown.fundraising.level == "Not Started"
        assert [i.code for i in stats.action_items] == [
            "safeguarding_no_data",
            "overseas_no_data",
            "fundraising_no_data",
        ]
        assert stats.trends.direction is None

    def test_unknown_organization(self, statistics_service):
        with pytest.raises(NotFoundError):
            statistics_service.compute_compliance_statistics(999, as_of=AS_OF)

    def test_trend_against_previous_snapshot(self, temp_db, statistics_service, scored_organization):
        temp_db.create_score_snapshot(
            scored_organization.id, 70, captured_at=datetime(2025, 5, 1, 9, 0, tzinfo=UTC)
        )
        stats = statistics_service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)

        assert stats.trends.direction == TrendDirection.UP
        assert stats.trends.change == 14
        assert stats.trends.last_month == 70

    def test_trend_ignores_snapshots_from_as_of_day(
        self, temp_db, statistics_service, scored_organization
    ):
        temp_db.create_score_snapshot(
            scored_organization.id, 90, captured_at=datetime(2025, 5, 20, tzinfo=UTC)
        )
        temp_db.create_score_snapshot(
            scored_organization.id, 50, captured_at=datetime(2025, 6, 1, 8, 0, tzinfo=UTC)
        )
        stats = statistics_service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)

        assert stats.trends.last_month == 90
        assert stats.trends.direction == TrendDirection.DOWN
        assert stats.trends.change == -6

    def test_inactive_safeguarding_records_ignored(
        self, statistics_service, safeguarding_service, scored_organization
    ):
        expired = [
            r for r in safeguarding_service.list_records(scored_organization.id)
            if r.person_name == "Expired Person"
        ][0]
        safeguarding_service.deactivate_record(expired.id)

        stats = statistics_service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        assert stats.breakdown.safeguarding.percentage == 90
        assert "dbs_expired" not in [i.code for i in stats.action_items]

    def test_fetch_failure_propagates(self, temp_db, scored_organization, monkeypatch):
        """A failed record read surfaces as FetchError and nothing is cached."""
        cache = InMemoryStatisticsCache()
        service = ComplianceStatisticsService(temp_db, cache)

        def fail(organization_id):
            raise FetchError("Could not load overseas activities")

        monkeypatch.setattr(temp_db, "list_overseas_activities", fail)

        with pytest.raises(FetchError):
            service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        assert len(cache) == 0

    def test_store_failure_on_organization_read(self, temp_db, sample_organization, monkeypatch):
        """A SQLAlchemy error on the first read is wrapped, not leaked."""
        session = temp_db._get_session()

        def locked(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "query", locked)

        with pytest.raises(FetchError) as excinfo:
            ComplianceStatisticsService(temp_db).compute_compliance_statistics(
                sample_organization.id, as_of=AS_OF
            )

        assert "organization" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, OperationalError)

    def test_identical_input_gives_identical_output(self, temp_db, scored_organization):
        first = ComplianceStatisticsService(temp_db).compute_compliance_statistics(
            scored_organization.id, as_of=AS_OF
        )
        second = ComplianceStatisticsService(temp_db).compute_compliance_statistics(
            scored_organization.id, as_of=AS_OF
        )

        assert first is not second
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_to_dict_is_json_serialisable(self, statistics_service, scored_organization):
        stats = statistics_service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        data = json.loads(json.dumps(stats.to_dict()))

        assert data["as_of"] == "2025-06-01"
        assert data["overall"] == {"percentage": 84, "level": "Good", "grade": "B"}
        assert data["breakdown"]["overseas"]["percentage"] == 85
        assert data["trends"] == {"direction": None, "change": None, "last_month": None}


class TestStatisticsCaching:
    """Tests for cache use in the statistics service."""

    def test_repeated_computation_uses_cache(self, temp_db, scored_organization):
        cache = InMemoryStatisticsCache()
        service = ComplianceStatisticsService(temp_db, cache)

        first = service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        second = service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)

        assert second is first
        assert cache.get(scored_organization.id, statistics_cache_kind(AS_OF)) is first

    def test_country_risk_change_clears_cache(self, temp_db, scored_organization):
        cache = InMemoryStatisticsCache()
        service = ComplianceStatisticsService(temp_db, cache)
        before = service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        assert before.breakdown.overseas.percentage == 85

        CountryService(temp_db, cache).set_country("SY", "Syria", "low")

        assert len(cache) == 0
        after = service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        assert after.breakdown.overseas.percentage == 100

    def test_record_write_invalidates_cache(self, temp_db, scored_organization):
        cache = InMemoryStatisticsCache()
        service = ComplianceStatisticsService(temp_db, cache)
        income_service = IncomeService(temp_db, cache)

        before = service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        income_service.add_record(
            scored_organization.id, "grant", Decimal("2000"), documentation_complete=False
        )
        after = service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)

        assert after is not before
        assert after.breakdown.fundraising.percentage == 84

    def test_different_dates_cached_separately(self, temp_db, scored_organization):
        cache = InMemoryStatisticsCache()
        service = ComplianceStatisticsService(temp_db, cache)

        june = service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        july = service.compute_compliance_statistics(scored_organization.id, as_of=date(2025, 7, 1))

        assert june.breakdown.safeguarding.percentage == 70
        # The expiring check has lapsed by July
        assert july.breakdown.safeguarding.percentage == 60
        assert len(cache) == 2


class TestSnapshots:
    """Tests for record_snapshot and get_score_history."""

    def test_record_snapshot(self, statistics_service, scored_organization):
        captured_at = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
        snapshot = statistics_service.record_snapshot(scored_organization.id, captured_at=captured_at)

        assert snapshot.overall_score == 84
        assert snapshot.captured_at == captured_at

        history = statistics_service.get_score_history(scored_organization.id)
        assert [s.overall_score for s in history] == [84]
        assert history[0].id == snapshot.id

    def test_snapshot_feeds_next_days_trend(self, statistics_service, scored_organization):
        statistics_service.record_snapshot(
            scored_organization.id, captured_at=datetime(2025, 5, 31, 23, 0, tzinfo=UTC)
        )
        stats = statistics_service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)
        assert stats.trends.direction == TrendDirection.FLAT

    def test_record_snapshot_invalidates_cache(self, temp_db, scored_organization):
        cache = InMemoryStatisticsCache()
        service = ComplianceStatisticsService(temp_db, cache)
        service.compute_compliance_statistics(scored_organization.id, as_of=AS_OF)

        service.record_snapshot(scored_organization.id, captured_at=datetime(2025, 6, 1, 12, 0, tzinfo=UTC))
        assert len(cache) == 0

    def test_history_newest_first_with_limit(self, temp_db, statistics_service, sample_organization):
        for day, score in ((1, 40), (2, 55), (3, 70)):
            temp_db.create_score_snapshot(
                sample_organization.id, score, captured_at=datetime(2025, 3, day, tzinfo=UTC)
            )

        history = statistics_service.get_score_history(sample_organization.id, limit=2)
        assert [s.overall_score for s in history] == [70, 55]

    def test_history_rejects_bad_limit(self, statistics_service, sample_organization):
        with pytest.raises(ValidationError):
            statistics_service.get_score_history(sample_organization.id, limit=0)

    def test_history_unknown_organization(self, statistics_service):
        with pytest.raises(NotFoundError):
            statistics_service.get_score_history(999)


def test_lookup_country_risk(statistics_service, sample_countries):
    assert statistics_service.lookup_country_risk("gb").risk_level == RiskLevel.LOW

    unknown = statistics_service.lookup_country_risk("zz")
    assert unknown.code == "ZZ"
    assert unknown.risk_level == RiskLevel.HIGH
    assert unknown.additional_checks_required is True
