"""Diagnosis services package."""

from anthaathi.services.diagnosis.mock_service import (
    LEAF_BLIGHT,
    DiagnosisServiceInterface,
    MockDiagnosisService,
)

__all__ = [
    "LEAF_BLIGHT",
    "DiagnosisServiceInterface",
    "MockDiagnosisService",
]
