"""AI-powered payment slip field extractor."""

import base64
import json
import mimetypes
import re
from pathlib import Path

from slipstage.extraction.base import BaseSlipExtractor
from slipstage.extraction.client_base import BaseExtractionClient
from slipstage.extraction.exceptions import ExtractionError
from slipstage.extraction.models import PaymentSlipFields
from slipstage.extraction.prompt_loader import load_json_schema, load_prompt
from slipstage.extraction.validator import validate_and_build
from slipstage.logging.logger import Log

_JSON_OBJECT = re.compile(r"\{.*?\}", re.DOTALL)


class SlipExtractor(BaseSlipExtractor):
    """Reads transfer details from a slip image using a vision model."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        prompt_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._system_prompt = system_prompt
        self._prompt = load_prompt(prompt_path)
        self._json_schema = json.loads(load_json_schema(json_schema_path))

    def extract(self, image_path: Path) -> PaymentSlipFields:
        data_url = self._data_url(image_path)
        raw_response = self._client.create_image_completion(
            model=self._model,
            system_prompt=self._system_prompt,
            user_prompt=self._prompt,
            image_data_url=data_url,
            json_schema=self._json_schema,
        )
        Log.debug("SlipExtractor", f"AI raw response:\n{raw_response}")
        return validate_and_build(self._parse_json(raw_response))

    @staticmethod
    def _data_url(image_path: Path) -> str:
        try:
            payload = image_path.read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Cannot read {image_path}: {exc}") from exc
        mime_type = mimetypes.guess_type(image_path.name)[0] or "image/jpeg"
        return f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}"

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError:
            match = _JSON_OBJECT.search(cleaned)
            if match is None:
                raise ExtractionError("No JSON object found in response") from None
            try:
                parsed = json.loads(match.group(0))
            except json.JSONDecodeError as exc:
                raise ExtractionError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionError("JSON response must be an object")
        return parsed
