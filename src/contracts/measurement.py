from enum import Enum

from pydantic import BaseModel, ConfigDict


class Operation(str, Enum):
    """
    Storage operations whose latency and outcome are recorded.
    """

    LIST_BUCKETS = "list_buckets"
    PUT_OBJECT = "put_object"
    GET_OBJECT = "get_object"
    REMOVE_OBJECT = "remove_object"
    DURABILITY_GET_OBJECT = "durability_get_object"


class MeasurementOutcome(BaseModel):
    """
    Latency and outcome of one operation invocation.
    """

    model_config = ConfigDict(frozen=True)

    operation: Operation
    endpoint: str
    elapsed_seconds: float
    success: bool
