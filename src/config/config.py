import os


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class Config:
    """
    Configuration class for environment variables and default settings.
    """

    # One probe is started per name; the endpoint is the name plus the suffix
    PROBE_NAMES = [
        name.strip()
        for name in os.environ.get("PROBE_NAMES", "").split(",")
        if name.strip()
    ]
    PROBE_ENDPOINT_SUFFIX = os.environ.get("PROBE_ENDPOINT_SUFFIX", "")

    S3_ACCESS_KEY = os.environ.get("S3_ACCESS_KEY", "")
    S3_SECRET_KEY = os.environ.get("S3_SECRET_KEY", "")
    S3_REGION = os.environ.get("S3_REGION", "us-east-1")
    S3_SECURE = _env_bool("S3_SECURE")

    LATENCY_BUCKET_NAME = os.environ.get("LATENCY_BUCKET_NAME", "probe-latency")
    DURABILITY_BUCKET_NAME = os.environ.get(
        "DURABILITY_BUCKET_NAME", "probe-durability"
    )

    PROBE_RATE_PER_MIN = int(os.environ.get("PROBE_RATE_PER_MIN", "1"))
    DURABILITY_ITEM_TOTAL = int(os.environ.get("DURABILITY_ITEM_TOTAL", "10000"))
    DURABILITY_SAMPLE_SIZE = int(os.environ.get("DURABILITY_SAMPLE_SIZE", "3"))

    # Retry policy for writes while seeding the durability bucket
    SEED_MAX_ATTEMPTS = int(os.environ.get("SEED_MAX_ATTEMPTS", "10"))
    SEED_BASE_DELAY = float(os.environ.get("SEED_BASE_DELAY", "5.0"))
    SEED_MAX_DELAY = float(os.environ.get("SEED_MAX_DELAY", "60.0"))
    SEED_MAX_DURATION = (
        float(os.environ["SEED_MAX_DURATION"])
        if os.environ.get("SEED_MAX_DURATION")
        else None
    )

    # Seconds to wait for in-flight checks on shutdown before cancelling them
    SHUTDOWN_JOIN_TIMEOUT = float(os.environ.get("SHUTDOWN_JOIN_TIMEOUT", "10.0"))
