"""
Typed payloads shared by the n8n tools.

Enums serialise to the exact lowercase strings n8n expects on the wire.
Models use camelCase aliases for the JSON body and snake_case in Python.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AllOrNone(str, Enum):
    """Whether n8n keeps execution data: for every execution or for none"""

    ALL = "all"
    NONE = "none"


class ExecutionStatus(str, Enum):
    """Final state of a recorded workflow execution"""

    ERROR = "error"
    SUCCESS = "success"
    WAITING = "waiting"


class WorkflowSettings(BaseModel):
    """Workflow-level settings sent with create and update requests"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    save_execution_progress: bool = False
    save_manual_executions: bool = False
    save_data_error_execution: AllOrNone = AllOrNone.ALL
    save_data_success_execution: AllOrNone = AllOrNone.ALL
    execution_timeout: int = Field(default=3600, ge=-1)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TagId(BaseModel):
    """Reference to an existing tag by its ID"""

    id: str
