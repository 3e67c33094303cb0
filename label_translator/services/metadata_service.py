"""
Metadata service adapters.

The batch executor talks to the metadata service through ``MetadataService``:
one call per batch, returning the per-request faults or raising
``TransportError`` when the call as a whole failed.
"""
from typing import Optional, Protocol, Sequence

import httpx

from label_translator.core.config import settings
from label_translator.core.exceptions import TransportError
from label_translator.core.http_client import get_http_client
from label_translator.core.logging_config import LogCategory, log_debug
from label_translator.models.operations import OperationBase
from label_translator.schemas.bulk import BulkResponse

EXECUTE_MULTIPLE_PATH = "/ExecuteMultiple"
# Longest response body quoted in a transport error
MAX_ERROR_BODY_CHARS = 500


class MetadataService(Protocol):
    """Remote side of a bulk submission."""

    def execute_multiple(
        self,
        operations: Sequence[OperationBase],
        *,
        continue_on_error: bool = True,
        return_responses: bool = False,
    ) -> BulkResponse:
        ...


def _short_body(response: httpx.Response) -> str:
    try:
        text = response.text
    except (httpx.ResponseNotRead, UnicodeDecodeError):
        return ""
    text = " ".join(text.split())
    if len(text) > MAX_ERROR_BODY_CHARS:
        return text[:MAX_ERROR_BODY_CHARS] + "..."
    return text


class HttpMetadataService:
    """``MetadataService`` over the JSON ExecuteMultiple endpoint."""

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.Client] = None):
        """
        Initialize the adapter.

        Args:
            base_url: Service base URL (defaults to METADATA_SERVICE_URL)
            client: HTTP client to use (defaults to the shared client)
        """
        self.base_url = (base_url or settings.metadata_service_url).rstrip("/")
        self._client = client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = get_http_client()
        return self._client

    @property
    def execute_multiple_url(self) -> str:
        return f"{self.base_url}{EXECUTE_MULTIPLE_PATH}"

    def execute_multiple(
        self,
        operations: Sequence[OperationBase],
        *,
        continue_on_error: bool = True,
        return_responses: bool = False,
    ) -> BulkResponse:
        """
        Submit operations as one bulk request.

        Raises:
            TransportError: If the request failed, the service answered with a
                non-2xx status, or the body is not a bulk response
        """
        payload = {
            "Requests": [operation.to_request() for operation in operations],
            "Settings": {
                "ContinueOnError": continue_on_error,
                "ReturnResponses": return_responses,
            },
        }
        log_debug(
            "Submitting bulk request",
            category=LogCategory.HTTP,
            url=self.execute_multiple_url,
            requests=len(operations),
        )

        try:
            response = self.client.post(self.execute_multiple_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            body = _short_body(e.response)
            message = f"Metadata service returned HTTP {status_code}"
            if body:
                message = f"{message}: {body}"
            raise TransportError(message, status_code=status_code) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Metadata service request failed: {e}") from e

        try:
            return BulkResponse.model_validate(response.json())
        except ValueError as e:
            raise TransportError(f"Invalid bulk response from metadata service: {e}") from e
