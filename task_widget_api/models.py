import datetime
import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Person(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class Priority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class NewTaskRequest(BaseModel):
    """Request body for creating a task.

    Wire names are camelCase (``descriptionHtml``, ``dueDate``, ``assignedToId``).
    """

    title: str
    description_html: Optional[str] = Field(default=None, alias="descriptionHtml")
    priority: Priority
    due_date: Optional[datetime.date] = Field(default=None, alias="dueDate")
    assigned_to_id: Optional[str] = Field(default=None, alias="assignedToId")

    @field_validator("title")
    @classmethod
    def validate_title_not_blank(cls, v):
        # blank means nothing left after trimming control chars and spaces (<= U+0020)
        if not v or all(ord(c) <= 0x20 for c in v):
            raise ValueError("must not be blank")
        if any(0xD800 <= ord(c) <= 0xDFFF for c in v):
            raise ValueError("must not contain unpaired surrogates")
        return v


class TaskResponse(BaseModel):
    id: str
    title: str
