from pydantic import BaseModel, ConfigDict, Field, model_validator

from contracts.retry_policy import RetryPolicy

MILLISECONDS_IN_MINUTE = 60_000


class ProbeConfig(BaseModel):
    """
    Immutable configuration of a single probe targeting one storage endpoint.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    endpoint: str
    access_key: str = Field(default="", repr=False)
    secret_key: str = Field(default="", repr=False)
    latency_bucket_name: str
    durability_bucket_name: str
    probe_rate_per_min: int = Field(gt=0)
    durability_item_total: int = Field(default=10_000, gt=0)
    durability_item_size: int = Field(default=1024 * 1024, gt=0)
    latency_item_size: int = Field(default=1024, gt=0)
    durability_sample_size: int = Field(default=3, ge=0)
    secure: bool = False
    region: str = "us-east-1"
    seed_retry: RetryPolicy = Field(default_factory=RetryPolicy)

    @model_validator(mode="after")
    def _check_bucket_names(self):
        if self.latency_bucket_name == self.durability_bucket_name:
            raise ValueError(
                "latency_bucket_name and durability_bucket_name must differ, "
                f"both are {self.latency_bucket_name!r}"
            )
        return self

    @property
    def tick_interval_ms(self) -> int:
        return MILLISECONDS_IN_MINUTE // self.probe_rate_per_min

    @property
    def tick_interval_seconds(self) -> float:
        return self.tick_interval_ms / 1000

    @property
    def endpoint_url(self) -> str:
        if "://" in self.endpoint:
            return self.endpoint
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.endpoint}"
