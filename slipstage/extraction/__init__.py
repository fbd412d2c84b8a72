from slipstage.extraction.base import BaseSlipExtractor
from slipstage.extraction.extractor import SlipExtractor
from slipstage.extraction.factory import ExtractorFactory

__all__ = ["BaseSlipExtractor", "ExtractorFactory", "SlipExtractor"]
