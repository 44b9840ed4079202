"""
Audit logging and reporting for fiscal code operations.

Provides structured log lines for every build and validation, and a
plain-text report for batch sessions.
"""

import logging
from datetime import datetime
from typing import Dict

from ..core.data_models import PersonalData, SessionStatistics, ValidationResult


class FiscalCodeAuditLogger:
    """
    Structured audit logging for fiscal code operations.

    Personal data is reduced to names in log lines; birth dates and
    places only appear inside the resulting code.
    """

    def __init__(self, logger_name: str = "fiscal_code.audit"):
        """
        Initialize the audit logger.

        Args:
            logger_name: Name for the logger instance
        """
        self.logger = logging.getLogger(logger_name)
        self.session_start_time = datetime.now()

    def log_build(self, data: PersonalData, code: str) -> None:
        self.logger.info(f"BUILT - {data.given_name} {data.surname} - Code: {code}")

    def log_build_failure(self, row: Dict[str, str], error: Exception) -> None:
        """
        Log a failed build.

        Args:
            row: Raw input record
            error: The error that stopped the build
        """
        self.logger.warning(
            f"BUILD_FAILED - {row.get('given_name', '')} {row.get('surname', '')} - "
            f"{type(error).__name__}: {error}"
        )

    def log_validation(self, result: ValidationResult) -> None:
        """
        Log a validation outcome.

        Args:
            result: Result of the validation
        """
        if result.is_valid:
            self.logger.info(f"VALID - Code: {result.candidate}")
            return

        log_parts = [f"INVALID_CODE - Code: {result.candidate}"]
        log_parts.append(f"Well formed: {result.is_well_formed}")
        log_parts.append(f"Checksum: {'OK' if result.checksum_matches else 'MISMATCH'}")
        if result.details:
            log_parts.append(f"Rules: {', '.join(rule.value for rule in result.details)}")

        self.logger.warning(" - ".join(log_parts))

    def log_session_summary(self, stats: SessionStatistics) -> None:
        """
        Log summary statistics for the session.

        Args:
            stats: Session statistics to log
        """
        session_duration = datetime.now() - self.session_start_time

        self.logger.info(f"SESSION_COMPLETE - Duration: {session_duration}")
        self.logger.info(f"TOTAL_PROCESSED: {stats.total_processed}")
        self.logger.info(f"BUILT: {stats.built}")
        self.logger.info(f"BUILD_FAILURES: {stats.build_failures}")
        self.logger.info(f"CODES_CHECKED: {stats.codes_checked}")
        self.logger.info(f"CODES_MISMATCHING: {stats.codes_mismatching}")
        self.logger.info(f"CODES_UNCHECKED: {stats.codes_unchecked}")

        if stats.error_counts:
            self.logger.info("ERROR_DISTRIBUTION:")
            for error_kind, count in sorted(stats.error_counts.items()):
                self.logger.info(f"  {error_kind}: {count}")


def generate_batch_report(stats: SessionStatistics) -> str:
    """
    Generate a plain-text report for a batch session.

    Args:
        stats: Session statistics

    Returns:
        Formatted report
    """
    report_lines = []

    report_lines.extend([
        "=" * 70,
        "FISCAL CODE BATCH REPORT",
        "=" * 70,
        f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        ""
    ])

    total = stats.total_processed
    if total > 0:
        failure_rate = (stats.build_failures / total) * 100

        report_lines.extend([
            "OVERALL STATISTICS:",
            f"  Total records processed: {total:,}",
            f"  Codes built: {stats.built:,} ({stats.get_success_rate():.1%})",
            f"  Build failures: {stats.build_failures:,} ({failure_rate:.1f}%)",
            ""
        ])

    if stats.codes_checked:
        report_lines.extend([
            "RECORDED CODES:",
            f"  Checked: {stats.codes_checked:,}",
            f"  Matching: {stats.codes_matching:,}",
            f"  Mismatching: {stats.codes_mismatching:,}",
            f"  Not checked (lookup failed): {stats.codes_unchecked:,}",
            ""
        ])

    if stats.error_counts:
        report_lines.append("ERROR DISTRIBUTION:")
        for error_kind, count in sorted(stats.error_counts.items(),
                                        key=lambda x: x[1], reverse=True):
            percentage = (count / total * 100) if total > 0 else 0
            report_lines.append(f"  {error_kind}: {count:,} ({percentage:.1f}%)")
        report_lines.append("")

    report_lines.append("=" * 70)

    return "\n".join(report_lines)
