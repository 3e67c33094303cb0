import json

import httpx
import pytest

from label_translator.core.exceptions import TransportError
from label_translator.models.enums import LogType
from label_translator.schemas.progress import ProgressSnapshot
from label_translator.services.batch_accumulator import BatchAccumulator
from label_translator.services.batch_executor import BatchExecutor
from label_translator.services.metadata_service import HttpMetadataService

BASE_URL = "https://crm.example.com/api/metadata"


def _service(handler) -> HttpMetadataService:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpMetadataService(base_url=BASE_URL + "/", client=client)


def test_posts_requests_and_settings(operations_factory):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"IsFaulted": False, "Responses": []})

    operations = operations_factory(2)
    response = _service(handler).execute_multiple(
        operations, continue_on_error=True, return_responses=False
    )

    assert captured["url"] == f"{BASE_URL}/ExecuteMultiple"
    assert captured["body"]["Settings"] == {"ContinueOnError": True, "ReturnResponses": False}
    requests = captured["body"]["Requests"]
    assert [item["RequestName"] for item in requests] == ["UpdateAttribute", "UpdateAttribute"]
    assert requests[1]["Parameters"]["attributeLogicalName"] == "new_field1"
    assert requests[1]["Parameters"]["displayName"] == [{"label": "Champ 1", "languageCode": 1036}]
    assert "kind" not in requests[0]["Parameters"]
    assert response.faults == []


def test_parses_faults(operations_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "IsFaulted": True,
                "Responses": [
                    {"RequestIndex": 2, "Fault": {"Message": "Label is required", "ErrorCode": -2147220970}},
                ],
            },
        )

    response = _service(handler).execute_multiple(operations_factory(3))

    assert response.is_faulted is True
    assert len(response.faults) == 1
    assert response.faults[0].request_index == 2
    assert response.faults[0].fault.message == "Label is required"
    assert response.faults[0].fault.error_code == -2147220970


def test_http_error_status_raises_transport_error(operations_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service   Unavailable")

    with pytest.raises(TransportError) as exc_info:
        _service(handler).execute_multiple(operations_factory(1))

    assert exc_info.value.status_code == 503
    assert str(exc_info.value) == "Metadata service returned HTTP 503: Service Unavailable"


def test_network_error_raises_transport_error(operations_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        _service(handler).execute_multiple(operations_factory(1))

    assert "connection refused" in str(exc_info.value)
    assert exc_info.value.status_code is None


@pytest.mark.parametrize(
    "content",
    [b"not json", b'["a list"]', b'{"Responses": [{"Fault": {"Message": "no index"}}]}'],
)
def test_malformed_body_raises_transport_error(operations_factory, content):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=content, headers={"Content-Type": "application/json"})

    with pytest.raises(TransportError, match="Invalid bulk response"):
        _service(handler).execute_multiple(operations_factory(1))


def test_long_error_body_is_truncated(operations_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="x" * 2000)

    with pytest.raises(TransportError) as exc_info:
        _service(handler).execute_multiple(operations_factory(1))

    assert str(exc_info.value).endswith("x" * 500 + "...")


def test_null_fault_message_is_read_as_empty(operations_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"IsFaulted": True, "Responses": [{"RequestIndex": 1, "Fault": {"Message": None}}]},
        )

    response = _service(handler).execute_multiple(operations_factory(5))

    assert [(item.request_index, item.fault.message) for item in response.faults] == [(1, "")]


def test_null_fault_message_fails_only_its_operation(operations_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"IsFaulted": True, "Responses": [{"RequestIndex": 1, "Fault": {"Message": None}}]},
        )

    accumulator = BatchAccumulator(batch_size=5)
    accumulator.extend(operations_factory(5))
    progress = ProgressSnapshot()
    logs = []

    BatchExecutor(_service(handler)).run(accumulator.flush(), progress, on_log=logs.append)

    assert (progress.success_count, progress.failure_count) == (4, 1)
    assert [(entry.level, entry.message) for entry in logs] == [
        (LogType.ERROR, "Error while updating attribute new_field1: ")
    ]
