"""Offline extraction client for local runs and tests."""

import json
from typing import ClassVar

from slipstage.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Returns a fixed all-null extraction result. No network calls."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "transferFromWhom": None,
        "transferToWhom": None,
        "transferFromAccountNo": None,
        "transferToAccountNo": None,
        "transferDateTime": None,
        "amount": None,
        "transactionID": None,
        "transferReceiptMemo": None,
    }

    def create_image_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_data_url: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, system_prompt, user_prompt, image_data_url, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
