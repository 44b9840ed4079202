"""Audit logging and reports."""

from .audit_logger import FiscalCodeAuditLogger, generate_batch_report

__all__ = [
    'FiscalCodeAuditLogger',
    'generate_batch_report'
]
