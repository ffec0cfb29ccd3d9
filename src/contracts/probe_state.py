from enum import Enum
from typing import List

from pydantic import BaseModel


class ProbeState(str, Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    DISPATCHING = "dispatching"
    TERMINATED = "terminated"
    FAILED = "failed"


class ProbeStatus(BaseModel):
    """
    Snapshot of a probe as reported by the health endpoint.
    """

    name: str
    endpoint: str
    state: ProbeState
    in_flight_checks: int = 0


class HealthResponse(BaseModel):
    """
    Body of the health endpoint.
    """

    status: str
    probes: List[ProbeStatus]
