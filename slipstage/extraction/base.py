from abc import ABC, abstractmethod
from pathlib import Path

from slipstage.extraction.models import PaymentSlipFields


class BaseSlipExtractor(ABC):
    """Contract for payment-slip field extractors."""

    @abstractmethod
    def extract(self, image_path: Path) -> PaymentSlipFields:
        """Read transfer details from a staged slip image.

        Raises:
            ExtractionError: on any failure.
        """
