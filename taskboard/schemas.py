from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_core import PydanticCustomError

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class TaskStatus(str, Enum):
    todo = "todo"
    done = "done"


# --- field rules, shared by create / replace / partial update ---

def check_title(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise PydanticCustomError("title_required", "title is required")
    value = value.strip()
    if len(value) > TITLE_MAX_LENGTH:
        raise PydanticCustomError(
            "title_length", f"title must be between 1 and {TITLE_MAX_LENGTH} characters"
        )
    return value


def check_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise PydanticCustomError("description_type", "description must be a string")
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise PydanticCustomError(
            "description_length",
            f"description must be at most {DESCRIPTION_MAX_LENGTH} characters",
        )
    return value


def check_status(value: Any) -> str:
    if isinstance(value, TaskStatus):
        return value.value
    if not isinstance(value, str) or value not in (TaskStatus.todo.value, TaskStatus.done.value):
        raise PydanticCustomError("status_value", 'status must be either "todo" or "done"')
    return value


def _description_or_empty(value: Any) -> str:
    return check_description(value) or ""


Title = Annotated[str, BeforeValidator(check_title)]
Description = Annotated[str, BeforeValidator(_description_or_empty)]
Status = Annotated[TaskStatus, BeforeValidator(check_status)]

# error types whose message is already written for the client
RULE_ERRORS = {"title_required", "title_length", "description_type", "description_length", "status_value"}


# --- requests ---

class TaskCreate(BaseModel):
    """Body of POST /api/tasks. A client-supplied status is ignored."""

    title: Title
    description: Description = ""


class TaskReplace(BaseModel):
    """Body of PUT /api/tasks/{id}: every mutable field is required."""

    title: Title
    description: Description
    status: Status


class TaskPatch(BaseModel):
    """
    Body of PATCH /api/tasks/{id}.

    Absent fields stay unchanged and so does ``description: null``;
    ``title`` and ``status`` reject null.
    """

    model_config = ConfigDict(extra="forbid")

    title: Annotated[Optional[str], BeforeValidator(check_title)] = None
    description: Optional[Annotated[str, BeforeValidator(check_description)]] = None
    status: Annotated[Optional[TaskStatus], BeforeValidator(check_status)] = None

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True, exclude_none=True)
        if "status" in data:
            data["status"] = data["status"].value
        return data


# --- responses ---

class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    created_at: str = Field(
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )

    model_config = ConfigDict(from_attributes=True)


class ErrorOut(BaseModel):
    """Error body shared by the API and its clients."""

    error: str
