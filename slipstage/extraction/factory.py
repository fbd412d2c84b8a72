from slipstage.config.settings import Settings
from slipstage.extraction.base import BaseSlipExtractor
from slipstage.extraction.example_client_adapter import ExampleClientAdapter
from slipstage.extraction.extractor import SlipExtractor
from slipstage.extraction.openai_client_adapter import OpenAIClientAdapter


class ExtractorFactory:
    """Creates the configured slip extractor, or None when extraction is off."""

    PROVIDERS = ("none", "example", "openai", "openai_compatible")

    @classmethod
    def create(cls, settings: Settings) -> BaseSlipExtractor | None:
        provider = settings.extraction_provider.lower()
        if provider == "none":
            return None
        if provider == "example":
            return SlipExtractor(client=ExampleClientAdapter(), model="example")
        if provider not in cls.PROVIDERS:
            raise ValueError(
                f"Unknown extraction provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        base_url = None
        if provider == "openai_compatible":
            base_url = (settings.extraction_openai_base_url or "").strip()
            if not base_url:
                raise ValueError(
                    "extraction_openai_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
        client = OpenAIClientAdapter(
            api_key=settings.extraction_openai_api_key,
            timeout_seconds=settings.extraction_openai_timeout_seconds,
            base_url=base_url,
        )
        return SlipExtractor(client=client, model=settings.extraction_openai_model_name)
