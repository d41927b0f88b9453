"""
Pest and disease diagnosis.

No model runs on the device yet. The mock service accepts any image,
waits as long as a real inference call would, and returns one fixed
finding so the result screen can be built and tested.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from anthaathi.audit import AuditLogger
from anthaathi.config import get_settings
from anthaathi.models.advisory import DiagnosisResult


LEAF_BLIGHT = DiagnosisResult(
    disease="Leaf Blight (Helminthosporium)",
    cause=(
        "Fungal infection caused by high humidity and warm temperatures. "
        "Spores spread through wind and rain."
    ),
    treatment=(
        "Apply Mancozeb 75% WP at 2.5g/L or Propiconazole 25% EC at 1ml/L. "
        "Spray at 10-day intervals. Remove severely infected leaves."
    ),
    prevention=(
        "Use resistant varieties. Maintain proper spacing between plants. "
        "Avoid overhead irrigation. Apply preventive fungicide during monsoon season."
    ),
)


class DiagnosisServiceInterface(ABC):
    """Identifies crop diseases from a photo."""

    @abstractmethod
    async def analyze(self, image_bytes: bytes) -> DiagnosisResult:
        pass


class MockDiagnosisService(DiagnosisServiceInterface):

    def __init__(
        self,
        delay: Optional[float] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._delay = get_settings().app.diagnosis_delay_seconds if delay is None else delay
        self._audit_logger = audit_logger

    async def analyze(self, image_bytes: bytes) -> DiagnosisResult:
        """Return the fixed finding after the configured delay; the image is not inspected."""
        await asyncio.sleep(self._delay)
        result = LEAF_BLIGHT.model_copy()

        if self._audit_logger:
            await self._audit_logger.log_diagnosis_completed(result.disease)
        return result
