"""SQLAlchemy models for charitycomply database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Organization(Base):
    """Charity organization model."""

    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    charity_number = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    safeguarding_records = relationship(
        "SafeguardingRecord", back_populates="organization", cascade="all, delete-orphan"
    )
    overseas_activities = relationship(
        "OverseasActivity", back_populates="organization", cascade="all, delete-orphan"
    )
    income_records = relationship(
        "IncomeRecord", back_populates="organization", cascade="all, delete-orphan"
    )
    score_snapshots = relationship(
        "ScoreSnapshot", back_populates="organization", cascade="all, delete-orphan"
    )


class SafeguardingRecord(Base):
    """DBS check / safeguarding record model."""

    __tablename__ = "safeguarding_records"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    person_name = Column(String, nullable=False)
    role_type = Column(String, nullable=False)
    role_title = Column(String, nullable=True)
    dbs_check_type = Column(String, nullable=True)
    dbs_certificate_number = Column(String, nullable=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True)
    training_completed = Column(Boolean, nullable=True)
    training_date = Column(Date, nullable=True)
    works_with_children = Column(Boolean, nullable=True)
    works_with_vulnerable_adults = Column(Boolean, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_safeguarding_org", "organization_id"),)

    # Relationships
    organization = relationship("Organization", back_populates="safeguarding_records")


class OverseasActivity(Base):
    """Overseas activity / transfer model."""

    __tablename__ = "overseas_activities"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    activity_name = Column(String, nullable=False)
    activity_type = Column(String, default="other", nullable=False)
    country_code = Column(String(2), nullable=False)
    partner_name = Column(String, nullable=True)
    amount_gbp = Column(Numeric(12, 2), nullable=False)
    transfer_method = Column(String, nullable=True)
    transfer_date = Column(Date, nullable=True)
    transfer_reference = Column(String, nullable=True)
    approval_required = Column(Boolean, nullable=True)
    approval_obtained = Column(Boolean, nullable=True)
    sanctions_check_completed = Column(Boolean, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_overseas_org", "organization_id"),)

    # Relationships
    organization = relationship("Organization", back_populates="overseas_activities")


class IncomeRecord(Base):
    """Income / fundraising record model."""

    __tablename__ = "income_records"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    source = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date_received = Column(Date, nullable=True)
    donor_name = Column(String, nullable=True)
    reference_number = Column(String, nullable=True)
    documentation_complete = Column(Boolean, nullable=True)
    gift_aid_eligible = Column(Boolean, nullable=True)
    gift_aid_claimed = Column(Boolean, nullable=True)
    is_restricted = Column(Boolean, nullable=True)
    is_related_party = Column(Boolean, nullable=True)
    related_party_disclosure = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_income_org", "organization_id"),)

    # Relationships
    organization = relationship("Organization", back_populates="income_records")


class Country(Base):
    """Country risk table."""

    __tablename__ = "countries"

    code = Column(String(2), primary_key=True)
    name = Column(String, nullable=False)
    risk_level = Column(String, default="low", nullable=False)
    additional_checks_required = Column(Boolean, default=False, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class ScoreSnapshot(Base):
    """Historical overall score."""

    __tablename__ = "score_snapshots"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    overall_score = Column(Integer, nullable=False)
    captured_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_snapshot_org_captured", "organization_id", "captured_at"),)

    # Relationships
    organization = relationship("Organization", back_populates="score_snapshots")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
