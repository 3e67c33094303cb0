"""
Pytest fixtures shared across the unit and CLI suites.
"""
from __future__ import annotations

import uuid
from typing import Callable, Dict, List, Optional, Sequence

import pytest

from label_translator.core.exceptions import TransportError
from label_translator.models.operations import (
    LocalizedLabel,
    UpdateAttributeDefinition,
    UpdateOptionValueLabel,
)
from label_translator.schemas.bulk import BulkResponse


class FakeMetadataService:
    """
    In-memory metadata service.

    ``faults`` maps a submission number (0-based) to the fault messages of that
    submission, keyed by request index. ``transport_failures`` maps a
    submission number to the exception raised for it.
    """

    def __init__(
        self,
        faults: Optional[Dict[int, Dict[int, str]]] = None,
        transport_failures: Optional[Dict[int, Exception]] = None,
    ):
        self.faults = faults or {}
        self.transport_failures = transport_failures or {}
        self.submissions: List[Sequence] = []
        self.settings_seen: List[Dict[str, bool]] = []

    def execute_multiple(self, operations, *, continue_on_error=True, return_responses=False):
        number = len(self.submissions)
        self.submissions.append(tuple(operations))
        self.settings_seen.append(
            {"continue_on_error": continue_on_error, "return_responses": return_responses}
        )
        if number in self.transport_failures:
            raise self.transport_failures[number]
        batch_faults = self.faults.get(number, {})
        return BulkResponse(
            is_faulted=bool(batch_faults),
            responses=[
                {"RequestIndex": index, "Fault": {"Message": message}}
                for index, message in sorted(batch_faults.items())
            ],
        )


@pytest.fixture
def fake_service_factory() -> Callable[..., FakeMetadataService]:
    return FakeMetadataService


@pytest.fixture
def fake_service() -> FakeMetadataService:
    return FakeMetadataService()


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("Metadata service request failed: connection refused")


def make_attribute_update(index: int) -> UpdateAttributeDefinition:
    return UpdateAttributeDefinition(
        entity_logical_name="account",
        attribute_logical_name=f"new_field{index}",
        display_name=[LocalizedLabel(label=f"Champ {index}", language_code=1036)],
    )


@pytest.fixture
def operations_factory() -> Callable[[int], List[UpdateAttributeDefinition]]:
    """
    Factory for attribute updates named new_field0, new_field1, ...
    """

    def _create(count: int) -> List[UpdateAttributeDefinition]:
        return [make_attribute_update(i) for i in range(count)]

    return _create


@pytest.fixture
def global_option_update() -> UpdateOptionValueLabel:
    return UpdateOptionValueLabel(
        value=100000001,
        label=[LocalizedLabel(label="Rouge", language_code=1036)],
        option_set_name="new_color",
    )


@pytest.fixture
def local_option_update() -> UpdateOptionValueLabel:
    return UpdateOptionValueLabel(
        value=3,
        label=[LocalizedLabel(label="Chaud", language_code=1036)],
        attribute_logical_name="leadqualitycode",
        entity_logical_name="lead",
    )


@pytest.fixture
def record_id() -> uuid.UUID:
    return uuid.UUID("0b5c7a0e-3a43-4a8e-9a6e-1d2f4c8b9e10")
