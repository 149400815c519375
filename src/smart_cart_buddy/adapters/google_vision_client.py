"""Google Cloud Vision client for label, object and text detection."""

from dataclasses import dataclass

import httpx

from smart_cart_buddy.domain.errors import ProviderError, QuotaExceededError
from smart_cart_buddy.domain.ingredients import VisionData
from smart_cart_buddy.services.extraction import VisionClient

_LABEL_LIMIT = 15
_TEXT_LIMIT = 10
_OBJECT_LIMIT = 15


@dataclass
class HttpxGoogleVisionClient(VisionClient):
    """HTTPX-backed Google Vision `images:annotate` client."""

    api_key: str
    http_client: httpx.AsyncClient
    base_url: str = "https://vision.googleapis.com/v1"
    timeout_seconds: float = 30.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 30.0
    ) -> "HttpxGoogleVisionClient":
        """Create a vision client with a managed httpx session."""
        return cls(
            api_key=api_key,
            http_client=httpx.AsyncClient(),
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )

    async def annotate(self, image_base64: str) -> VisionData:
        """Run label, text and object detection on a base64 image."""
        payload = {
            "requests": [
                {
                    "image": {"content": _strip_data_url(image_base64)},
                    "features": [
                        {"type": "LABEL_DETECTION", "maxResults": _LABEL_LIMIT},
                        {"type": "TEXT_DETECTION", "maxResults": _TEXT_LIMIT},
                        {"type": "OBJECT_LOCALIZATION", "maxResults": _OBJECT_LIMIT},
                    ],
                }
            ]
        }
        try:
            response = await self.http_client.post(
                f"{self.base_url}/images:annotate",
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise ProviderError(f"Google Vision API unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise _status_error(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError("Google Vision returned invalid JSON") from exc
        return parse_annotations(data)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def parse_annotations(data: object) -> VisionData:
    """Normalize an `images:annotate` response body."""
    responses = data.get("responses") if isinstance(data, dict) else None
    if not isinstance(responses, list) or not responses:
        raise ProviderError("Google Vision returned an empty response")
    first = responses[0]
    if not isinstance(first, dict):
        raise ProviderError("Google Vision returned a malformed response")
    if first.get("error"):
        error = first["error"]
        if not isinstance(error, dict):
            raise ProviderError(f"Google Vision error: {error}")
        message = str(error.get("message") or "unknown error")
        if _is_quota(error.get("code"), str(error.get("status") or "")):
            raise QuotaExceededError(f"Google Vision quota exceeded: {message}")
        raise ProviderError(f"Google Vision error: {message}")

    labels = _annotation_rows(first, "labelAnnotations")
    objects = _annotation_rows(first, "localizedObjectAnnotations")
    texts = _annotation_rows(first, "textAnnotations")

    food_items: list[str] = []
    seen: set[str] = set()
    for name in [row.get("description") for row in labels] + [
        row.get("name") for row in objects
    ]:
        if not isinstance(name, str) or not name.strip():
            continue
        key = name.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        food_items.append(name.strip())

    detected_text = ""
    if texts and isinstance(texts[0].get("description"), str):
        detected_text = texts[0]["description"]

    return VisionData(
        food_items=food_items,
        detected_text=detected_text,
        raw_labels=labels,
        raw_objects=objects,
    )


def _annotation_rows(response: dict[str, object], key: str) -> list[dict[str, object]]:
    rows = response.get(key)
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, dict)]


def _status_error(response: httpx.Response) -> ProviderError:
    message = response.reason_phrase or str(response.status_code)
    status = ""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = str(body["error"].get("message") or message)
        status = str(body["error"].get("status") or "")
    if _is_quota(response.status_code, status):
        return QuotaExceededError(f"Google Vision quota exceeded: {message}")
    return ProviderError(f"Google Vision API error ({response.status_code}): {message}")


def _is_quota(code: object, status: str) -> bool:
    return code == 429 or status == "RESOURCE_EXHAUSTED"


def _strip_data_url(image_base64: str) -> str:
    if image_base64.startswith("data:") and "," in image_base64:
        return image_base64.split(",", 1)[1]
    return image_base64
