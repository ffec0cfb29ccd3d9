from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RetryPolicy(BaseModel):
    """
    Bounded exponential backoff used while seeding the durability bucket.

    The delay before attempt ``n + 1`` is ``base_delay * 2 ** (n - 1)``,
    capped at ``max_delay``. Retrying stops after ``max_attempts`` attempts
    or, when set, once ``max_duration`` seconds have elapsed.
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=10, ge=1)
    base_delay: float = Field(default=5.0, ge=0)
    max_delay: float = Field(default=60.0, ge=0)
    max_duration: Optional[float] = Field(default=None, gt=0)
