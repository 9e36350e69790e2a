"""
Record Models

Data classes for Airtable records and attachments, plus the structural
check that decides whether a field value is a list of attachments.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

# Field used as the record's display name
NAME_FIELD = 'Name'

# Key under which the record ID is stored in an export row
ID_KEY = 'id'


class FieldKind(Enum):
    """Shape of a record field value."""
    SCALAR = "scalar"
    ATTACHMENT_LIST = "attachment_list"
    OTHER_LIST = "other_list"


def classify_field(value: Any) -> FieldKind:
    """
    Classify a field value by its shape.

    Only the first element of a list is inspected: a list whose first
    element is a mapping with a 'url' key is treated as an attachment
    list as a whole, even if later elements look different.

    Args:
        value: Raw field value from the Airtable API

    Returns:
        FieldKind for the value
    """
    if not isinstance(value, list):
        return FieldKind.SCALAR

    if value and isinstance(value[0], Mapping) and 'url' in value[0]:
        return FieldKind.ATTACHMENT_LIST

    return FieldKind.OTHER_LIST


@dataclass
class Attachment:
    """A file attached to a record field."""
    url: str
    filename: str
    id: Optional[str] = None
    size: Optional[int] = None
    type: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> 'Attachment':
        """Build from an attachment object of the records endpoint."""
        return cls(
            url=data['url'],
            filename=data.get('filename') or data.get('id') or 'attachment',
            id=data.get('id'),
            size=data.get('size'),
            type=data.get('type'),
        )


@dataclass
class Record:
    """A single Airtable record."""
    id: str
    fields: Dict[str, Any] = field(default_factory=dict)
    created_time: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> 'Record':
        """Build from a record object of the records endpoint."""
        return cls(
            id=data['id'],
            fields=dict(data.get('fields') or {}),
            created_time=data.get('createdTime'),
        )

    @property
    def display_name(self) -> str:
        """
        Value of the Name field, or the record ID when it is falsy.

        None, '', 0 and False fall back; empty lists and objects do not.
        """
        name = self.fields.get(NAME_FIELD)
        if not name and not isinstance(name, (list, dict)):
            return self.id
        return str(name)

    def attachment_fields(self) -> List[str]:
        """Names of fields holding attachment lists, in field order."""
        return [
            name for name, value in self.fields.items()
            if classify_field(value) is FieldKind.ATTACHMENT_LIST
        ]
