"""CSV import domain service for compliance records."""

import csv
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from charitycomply.database.base import Database
from charitycomply.domain.cache import StatisticsCache
from charitycomply.domain.errors import NotFoundError, ValidationError, invalid_choice, organization_not_found
from charitycomply.domain.income import IncomeService
from charitycomply.domain.overseas import OverseasService
from charitycomply.domain.safeguarding import SafeguardingService
from charitycomply.utils.amount_parser import parse_amount
from charitycomply.utils.date_parser import parse_optional_date
from charitycomply.utils.flag_parser import parse_flag

logger = logging.getLogger(__name__)

# Column headers per record kind: (required columns, optional columns, reference column)
IMPORT_COLUMNS: dict[str, tuple[tuple[str, ...], tuple[str, ...], str]] = {
    "safeguarding": (
        ("person_name", "role_type"),
        (
            "role_title",
            "dbs_check_type",
            "dbs_certificate_number",
            "issue_date",
            "expiry_date",
            "training_completed",
            "training_date",
            "works_with_children",
            "works_with_vulnerable_adults",
            "notes",
        ),
        "dbs_certificate_number",
    ),
    "overseas": (
        ("activity_name", "country_code", "amount_gbp"),
        (
            "activity_type",
            "partner_name",
            "transfer_method",
            "transfer_date",
            "transfer_reference",
            "approval_required",
            "approval_obtained",
            "sanctions_check_completed",
        ),
        "transfer_reference",
    ),
    "income": (
        ("source", "amount"),
        (
            "date_received",
            "donor_name",
            "reference_number",
            "documentation_complete",
            "gift_aid_eligible",
            "gift_aid_claimed",
            "is_restricted",
            "is_related_party",
            "related_party_disclosure",
        ),
        "reference_number",
    ),
}

IMPORT_KINDS = tuple(IMPORT_COLUMNS)


class RecordImportService:
    """Service for importing compliance records from CSV files."""

    def __init__(self, db: Database, cache: Optional[StatisticsCache] = None):
        """Initialize record import service.

        Args:
            db: Database instance
            cache: Statistics cache to invalidate as records are added
        """
        self.db = db
        self.safeguarding_service = SafeguardingService(db, cache)
        self.overseas_service = OverseasService(db, cache)
        self.income_service = IncomeService(db, cache)

    def import_csv(self, csv_file_path: str, organization_id: int, kind: str) -> dict[str, Any]:
        """Import records from a CSV file.

        Args:
            csv_file_path: Path to CSV file
            organization_id: Organization the records belong to
            kind: One of "safeguarding", "overseas" or "income"

        Returns:
            Dict with import statistics:
            - imported: number of records imported
            - skipped: number of records skipped (reference already recorded)
            - errors: list of error messages

        Raises:
            ValidationError: If kind is unknown or required columns are missing
            NotFoundError: If organization doesn't exist
            FileNotFoundError: If CSV file doesn't exist
        """
        if kind not in IMPORT_COLUMNS:
            raise ValidationError(invalid_choice("import kind", kind, list(IMPORT_KINDS)))
        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))

        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        required, _, reference_column = IMPORT_COLUMNS[kind]
        reference_exists = self._reference_check(kind)
        add_row = self._row_importer(kind)

        imported = 0
        skipped = 0
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)

            csv_columns = reader.fieldnames
            if csv_columns is None:
                raise ValidationError("CSV file has no columns")

            csv_columns = [c.strip() for c in csv_columns]
            reader.fieldnames = csv_columns
            missing_columns = [c for c in required if c not in csv_columns]
            if missing_columns:
                raise ValidationError(
                    f"CSV file missing required columns: {', '.join(missing_columns)}"
                )

            for row_num, row in enumerate(reader, start=2):  # header is row 1
                values = {
                    key: value.strip() if isinstance(value, str) and value.strip() else None
                    for key, value in row.items()
                    if key is not None
                }

                missing = [c for c in required if not values.get(c)]
                if missing:
                    errors.append(f"Row {row_num}: Missing {', '.join(missing)}")
                    continue

                reference = values.get(reference_column)
                if reference and reference_exists(organization_id, reference):
                    skipped += 1
                    continue

                try:
                    add_row(organization_id, values)
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    continue
                imported += 1

        logger.info(
            "Imported %s %s record(s) for organization %s from %s (%s skipped, %s errors)",
            imported,
            kind,
            organization_id,
            csv_path.name,
            skipped,
            len(errors),
        )
        return {
            "imported": imported,
            "skipped": skipped,
            "errors": errors,
        }

    def _reference_check(self, kind: str) -> Callable[[int, str], bool]:
        if kind == "safeguarding":
            return self.db.safeguarding_reference_exists
        if kind == "overseas":
            return self.db.overseas_reference_exists
        return self.db.income_reference_exists

    def _row_importer(self, kind: str) -> Callable[[int, dict[str, Optional[str]]], int]:
        if kind == "safeguarding":
            return self._add_safeguarding
        if kind == "overseas":
            return self._add_overseas
        return self._add_income

    def _add_safeguarding(self, organization_id: int, values: dict[str, Optional[str]]) -> int:
        dbs_check_type = values.get("dbs_check_type")
        return self.safeguarding_service.add_record(
            organization_id=organization_id,
            person_name=values["person_name"],
            role_type=values["role_type"].lower(),
            role_title=values.get("role_title"),
            dbs_check_type=dbs_check_type.lower() if dbs_check_type else None,
            dbs_certificate_number=values.get("dbs_certificate_number"),
            issue_date=parse_optional_date(values.get("issue_date")),
            expiry_date=parse_optional_date(values.get("expiry_date")),
            training_completed=parse_flag(values.get("training_completed")),
            training_date=parse_optional_date(values.get("training_date")),
            works_with_children=parse_flag(values.get("works_with_children")),
            works_with_vulnerable_adults=parse_flag(values.get("works_with_vulnerable_adults")),
            notes=values.get("notes"),
        )

    def _add_overseas(self, organization_id: int, values: dict[str, Optional[str]]) -> int:
        transfer_method = values.get("transfer_method")
        return self.overseas_service.add_activity(
            organization_id=organization_id,
            activity_name=values["activity_name"],
            country_code=values["country_code"],
            amount_gbp=parse_amount(values["amount_gbp"]),
            activity_type=(values.get("activity_type") or "other").lower(),
            partner_name=values.get("partner_name"),
            transfer_method=transfer_method.lower() if transfer_method else None,
            transfer_date=parse_optional_date(values.get("transfer_date")),
            transfer_reference=values.get("transfer_reference"),
            approval_required=parse_flag(values.get("approval_required")),
            approval_obtained=parse_flag(values.get("approval_obtained")),
            sanctions_check_completed=parse_flag(values.get("sanctions_check_completed")),
        )

    def _add_income(self, organization_id: int, values: dict[str, Optional[str]]) -> int:
        return self.income_service.add_record(
            organization_id=organization_id,
            source=values["source"].lower(),
            amount=parse_amount(values["amount"]),
            date_received=parse_optional_date(values.get("date_received")),
            donor_name=values.get("donor_name"),
            reference_number=values.get("reference_number"),
            documentation_complete=parse_flag(values.get("documentation_complete")),
            gift_aid_eligible=parse_flag(values.get("gift_aid_eligible")),
            gift_aid_claimed=parse_flag(values.get("gift_aid_claimed")),
            is_restricted=parse_flag(values.get("is_restricted")),
            is_related_party=parse_flag(values.get("is_related_party")),
            related_party_disclosure=values.get("related_party_disclosure"),
        )
