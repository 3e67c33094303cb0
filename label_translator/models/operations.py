"""
Label update operations.

One operation is one atomic request against the metadata service. Operations
are built by the workbook parser, are immutable, and are consumed exactly once
by the batch executor.
"""
import uuid
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator


class LocalizedLabel(BaseModel):
    """A label text in one language."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str = Field(..., alias="label")
    language_code: int = Field(..., alias="languageCode", gt=0)


class OperationBase(BaseModel):
    """Common behaviour of every operation variant."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    # Name of the request on the metadata service
    request_name: ClassVar[str] = ""

    def to_request(self) -> Dict[str, Any]:
        """Serialize the operation to a bulk request item."""
        return {
            "RequestName": self.request_name,
            "Parameters": self.model_dump(mode="json", by_alias=True, exclude={"kind"}),
        }


class UpdateRecordField(OperationBase):
    """Update translated columns of a record (view, chart, dashboard, sitemap...)."""
    request_name: ClassVar[str] = "Update"

    kind: Literal["update_record_field"] = "update_record_field"
    logical_name: str = Field(..., alias="logicalName", min_length=1)
    record_id: uuid.UUID = Field(..., alias="id")
    field_values: Dict[str, Any] = Field(default_factory=dict, alias="fields")


class UpdateAttributeDefinition(OperationBase):
    """Update the display name and description of an attribute."""
    request_name: ClassVar[str] = "UpdateAttribute"

    kind: Literal["update_attribute_definition"] = "update_attribute_definition"
    entity_logical_name: str = Field(..., alias="entityLogicalName", min_length=1)
    attribute_logical_name: str = Field(..., alias="attributeLogicalName", min_length=1)
    display_name: List[LocalizedLabel] = Field(default_factory=list, alias="displayName")
    description: List[LocalizedLabel] = Field(default_factory=list, alias="description")
    merge_labels: bool = Field(True, alias="mergeLabels")


class UpdateRelationshipLabel(OperationBase):
    """Update the custom menu label of a relationship."""
    request_name: ClassVar[str] = "UpdateRelationship"

    kind: Literal["update_relationship_label"] = "update_relationship_label"
    schema_name: str = Field(..., alias="schemaName", min_length=1)
    labels: List[LocalizedLabel] = Field(default_factory=list, alias="labels")
    merge_labels: bool = Field(True, alias="mergeLabels")


class UpdateOptionSetLabel(OperationBase):
    """Update the display name and description of a global option set."""
    request_name: ClassVar[str] = "UpdateOptionSet"

    kind: Literal["update_option_set_label"] = "update_option_set_label"
    name: str = Field(..., alias="name", min_length=1)
    display_name: List[LocalizedLabel] = Field(default_factory=list, alias="displayName")
    description: List[LocalizedLabel] = Field(default_factory=list, alias="description")
    merge_labels: bool = Field(True, alias="mergeLabels")


class UpdateOptionValueLabel(OperationBase):
    """
    Update the label of one option.

    The option belongs to a global option set when ``option_set_name`` is set,
    otherwise to the local option set of an attribute.
    """
    request_name: ClassVar[str] = "UpdateOptionValue"

    kind: Literal["update_option_value_label"] = "update_option_value_label"
    value: int = Field(..., alias="value")
    label: List[LocalizedLabel] = Field(default_factory=list, alias="label")
    description: List[LocalizedLabel] = Field(default_factory=list, alias="description")
    option_set_name: Optional[str] = Field(None, alias="optionSetName")
    attribute_logical_name: Optional[str] = Field(None, alias="attributeLogicalName")
    entity_logical_name: Optional[str] = Field(None, alias="entityLogicalName")
    merge_labels: bool = Field(True, alias="mergeLabels")

    @field_validator("option_set_name", "attribute_logical_name", "entity_logical_name")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @model_validator(mode="after")
    def validate_target(self) -> "UpdateOptionValueLabel":
        """A local option needs the attribute and entity it belongs to."""
        if self.option_set_name is None and (
            self.attribute_logical_name is None or self.entity_logical_name is None
        ):
            raise ValueError(
                "optionSetName or both attributeLogicalName and entityLogicalName are required"
            )
        return self

    @property
    def is_global(self) -> bool:
        return self.option_set_name is not None


class UpdateLocalizedLabelSet(OperationBase):
    """Set all localized labels of one column of a record."""
    request_name: ClassVar[str] = "SetLocLabels"

    kind: Literal["update_localized_label_set"] = "update_localized_label_set"
    entity_logical_name: str = Field(..., alias="entityLogicalName", min_length=1)
    record_id: uuid.UUID = Field(..., alias="id")
    attribute_name: str = Field(..., alias="attributeName", min_length=1)
    labels: List[LocalizedLabel] = Field(default_factory=list, alias="labels")


Operation = Annotated[
    Union[
        UpdateRecordField,
        UpdateAttributeDefinition,
        UpdateRelationshipLabel,
        UpdateOptionSetLabel,
        UpdateOptionValueLabel,
        UpdateLocalizedLabelSet,
    ],
    Field(discriminator="kind"),
]

OperationList = TypeAdapter(List[Operation])
