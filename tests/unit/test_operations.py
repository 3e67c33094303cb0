import uuid

import pytest
from pydantic import ValidationError

from label_translator.models.operations import (
    LocalizedLabel,
    OperationList,
    UpdateAttributeDefinition,
    UpdateLocalizedLabelSet,
    UpdateOptionValueLabel,
    UpdateRecordField,
)


def test_operations_are_immutable():
    operation = UpdateAttributeDefinition(entity_logical_name="account", attribute_logical_name="name")

    with pytest.raises(ValidationError):
        operation.attribute_logical_name = "other"


def test_option_value_requires_target():
    with pytest.raises(ValidationError, match="optionSetName or both"):
        UpdateOptionValueLabel(value=1, attribute_logical_name="statuscode")


def test_blank_option_set_name_means_local_option():
    operation = UpdateOptionValueLabel(
        value=2,
        option_set_name="  ",
        attribute_logical_name="statuscode",
        entity_logical_name="account",
    )

    assert operation.option_set_name is None
    assert operation.is_global is False


def test_discriminated_union_parses_aliases():
    record_id = str(uuid.uuid4())
    operations = OperationList.validate_python(
        [
            {"kind": "update_record_field", "logicalName": "sitemap", "id": record_id, "fields": {}},
            {
                "kind": "update_localized_label_set",
                "entityLogicalName": "systemform",
                "id": record_id,
                "attributeName": "description",
                "labels": [{"label": "Texte", "languageCode": 1036}],
            },
        ]
    )

    assert isinstance(operations[0], UpdateRecordField)
    assert isinstance(operations[1], UpdateLocalizedLabelSet)
    assert operations[1].labels == [LocalizedLabel(label="Texte", language_code=1036)]


def test_to_request_uses_request_name_and_aliases(record_id):
    operation = UpdateRecordField(logical_name="savedquery", record_id=record_id, fields={"name": "Vue"})

    assert operation.to_request() == {
        "RequestName": "Update",
        "Parameters": {"logicalName": "savedquery", "id": str(record_id), "fields": {"name": "Vue"}},
    }


def test_language_code_must_be_positive():
    with pytest.raises(ValidationError):
        LocalizedLabel(label="Name", language_code=0)
