"""
Fiscal Code Batch Service

Service layer for computing fiscal codes for every row of a CSV file and
checking them against codes already on record.
"""

import csv
import logging
from typing import Dict, List, Optional

from .code_builder import CodeBuilder, make_personal_data
from .code_validator import CodeValidator
from .data_models import SessionStatistics
from .errors import FiscalCodeError, InvalidInputFile, PlaceLookupError
from ..places.resolver import PlaceResolver
from ..reporting.audit_logger import FiscalCodeAuditLogger

INPUT_FIELDS = ['surname', 'given_name', 'dob', 'sex', 'birthplace']
RECORDED_CODE_FIELD = 'fiscal_code'
OUTPUT_FIELDS = ['computed_fiscal_code', 'status', 'error']

STATUS_BUILT = 'BUILT'
STATUS_MATCH = 'MATCH'
STATUS_MISMATCH = 'MISMATCH'
STATUS_FAILED = 'FAILED'


class FiscalCodeService:
    """Service for batch fiscal code operations."""

    def __init__(self, place_resolver: Optional[PlaceResolver] = None):
        """
        Initialize the service.

        Args:
            place_resolver: Birthplace lookup (default: bundled Belfiore database)
        """
        self.builder = CodeBuilder(place_resolver)
        self.validator = CodeValidator(self.builder.place_resolver)
        self.audit = FiscalCodeAuditLogger()
        self.stats = SessionStatistics()

    def process_file(self, input_file: str, output_file: Optional[str] = None) -> SessionStatistics:
        """
        Compute fiscal codes for every row of a CSV file.

        Args:
            input_file: CSV with surname, given_name, dob, sex, birthplace
                and optionally fiscal_code columns
            output_file: Output CSV path (no output written if None)

        Returns:
            Session statistics
        """
        logging.info(f"Processing file: {input_file}")

        self.stats = SessionStatistics()

        with open(input_file, 'r', encoding='utf-8', newline='') as infile:
            reader = csv.DictReader(infile)
            fieldnames = list(reader.fieldnames or [])

            missing = [name for name in INPUT_FIELDS if name not in fieldnames]
            if missing:
                raise InvalidInputFile(
                    f"missing columns: {', '.join(missing)}", field='input_file')

            processed_records = [self.process_record(row) for row in reader]

        if output_file:
            fieldnames += [name for name in OUTPUT_FIELDS if name not in fieldnames]
            self._write_output_file(output_file, fieldnames, processed_records)

        self.audit.log_session_summary(self.stats)
        return self.stats

    def process_record(self, row: Dict[str, str]) -> Dict[str, str]:
        """Compute the code for one row and compare it with the recorded one."""
        self.stats.total_processed += 1

        try:
            data = make_personal_data(
                (row.get('surname') or '').strip(),
                (row.get('given_name') or '').strip(),
                (row.get('dob') or '').strip(),
                (row.get('sex') or '').strip(),
                (row.get('birthplace') or '').strip()
            )
            code = self.builder.build(data)
        except FiscalCodeError as e:
            self.stats.record_error(type(e).__name__)
            self.audit.log_build_failure(row, e)
            row.update({'computed_fiscal_code': '', 'status': STATUS_FAILED, 'error': str(e)})
            return row

        self.stats.built += 1
        self.audit.log_build(data, code)
        row.update({'computed_fiscal_code': code, 'status': STATUS_BUILT, 'error': ''})

        recorded = (row.get(RECORDED_CODE_FIELD) or '').strip()
        if recorded:
            self._check_recorded_code(row, recorded, code)

        return row

    def _check_recorded_code(self, row: Dict[str, str], recorded: str, code: str):
        """Compare the code on record with the computed one."""
        self.stats.codes_checked += 1
        try:
            result = self.validator.validate(recorded)
        except PlaceLookupError as e:
            self.stats.codes_unchecked += 1
            row['error'] = f"recorded code not checked: {e}"
            logging.warning(f"CHECK_SKIPPED - '{recorded}': {e}")
            return

        self.audit.log_validation(result)

        if result.candidate == code:
            self.stats.codes_matching += 1
            row['status'] = STATUS_MATCH
            return

        self.stats.codes_mismatching += 1
        row['status'] = STATUS_MISMATCH
        problems = [rule.value for rule in result.details]
        row['error'] = "recorded code differs from computed"
        if problems:
            row['error'] += f" ({', '.join(problems)})"
        logging.warning(
            f"CODE_MISMATCH - {row.get('given_name', '')} {row.get('surname', '')}: "
            f"recorded '{result.candidate}', computed '{code}'"
        )

    def _write_output_file(self, output_file: str, fieldnames: List[str], records: List[dict]):
        """Write processed records to output file."""
        with open(output_file, 'w', newline='', encoding='utf-8') as outfile:
            writer = csv.DictWriter(outfile, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(records)
