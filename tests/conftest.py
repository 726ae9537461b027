"""Shared pytest fixtures for charitycomply tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from charitycomply.database.factories import create_sqlite_database
from charitycomply.domain.income import IncomeService
from charitycomply.domain.organization import OrganizationService
from charitycomply.domain.overseas import CountryService, OverseasService
from charitycomply.domain.safeguarding import SafeguardingService
from charitycomply.domain.statistics import ComplianceStatisticsService

AS_OF = date(2025, 6, 1)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def organization_service(temp_db):
    """Create an OrganizationService with a temporary database."""
    return OrganizationService(temp_db)


@pytest.fixture
def safeguarding_service(temp_db):
    """Create a SafeguardingService with a temporary database."""
    return SafeguardingService(temp_db)


@pytest.fixture
def overseas_service(temp_db):
    """Create an OverseasService with a temporary database."""
    return OverseasService(temp_db)


@pytest.fixture
def country_service(temp_db):
    """Create a CountryService with a temporary database."""
    return CountryService(temp_db)


@pytest.fixture
def income_service(temp_db):
    """Create an IncomeService with a temporary database."""
    return IncomeService(temp_db)


@pytest.fixture
def statistics_service(temp_db):
    """Create a ComplianceStatisticsService with a temporary database."""
    return ComplianceStatisticsService(temp_db)


@pytest.fixture
def sample_organization(organization_service):
    """Create a sample organization for testing."""
    org_id = organization_service.create_organization(
        name="Hope Foundation", charity_number="1234567"
    )
    return organization_service.get_organization(org_id)


@pytest.fixture
def sample_countries(country_service):
    """Load a small country risk table."""
    country_service.set_country("GB", "United Kingdom", "low", False)
    country_service.set_country("KE", "Kenya", "medium", True)
    country_service.set_country("SY", "Syria", "high", False)
    return country_service.list_countries()


@pytest.fixture
def scored_organization(
    sample_organization, sample_countries, safeguarding_service, overseas_service, income_service
):
    """Organization whose records score safeguarding 70, overseas 85, fundraising 100 on AS_OF."""
    org_id = sample_organization.id

    safeguarding_service.add_record(
        org_id, "Expired Person", "volunteer", dbs_check_type="enhanced",
        issue_date=date(2021, 1, 10), expiry_date=date(2024, 1, 10), training_completed=True,
    )
    safeguarding_service.add_record(
        org_id, "Expiring Person", "employee", dbs_check_type="enhanced",
        issue_date=date(2022, 6, 11), expiry_date=date(2025, 6, 11), training_completed=True,
    )
    for name in ("Healthy One", "Healthy Two", "Healthy Three"):
        safeguarding_service.add_record(
            org_id, name, "trustee", dbs_check_type="basic",
            issue_date=date(2024, 1, 1), expiry_date=date(2027, 1, 1), training_completed=True,
        )

    overseas_service.add_activity(
        org_id, "Emergency relief", "SY", Decimal("10000"), activity_type="humanitarian_aid",
        approval_obtained=False,
    )
    overseas_service.add_activity(
        org_id, "Partner visit", "GB", Decimal("500"), activity_type="other",
    )

    for amount in ("100", "250", "1000", "5000"):
        income_service.add_record(
            org_id, "donation", Decimal(amount), documentation_complete=True,
            gift_aid_eligible=False,
        )

    return sample_organization


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
