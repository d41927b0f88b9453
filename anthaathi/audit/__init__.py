"""Audit logging package."""

from anthaathi.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
