"""
Probe factory for creating probes from the environment configuration.
"""
import logging
from typing import List, Optional

from abstractions.metrics_sink import MetricsSink
from config.config import Config
from contracts.probe_config import ProbeConfig
from contracts.retry_policy import RetryPolicy
from core.probe import Probe
from core.s3_storage_client import BotoStorageClient

logger = logging.getLogger(__name__)


class ProbeFactory:
    """
    Factory class for creating probes and their storage clients.
    """

    @staticmethod
    def build_config(name: str, **overrides) -> ProbeConfig:
        """
        Build the configuration of the probe called ``name`` from Config.

        Args:
            name (str): Probe name, also the first part of the endpoint host.
            **overrides: Field values taking precedence over Config.

        Returns:
            ProbeConfig: The validated configuration.

        Raises:
            pydantic.ValidationError: If the resulting configuration is invalid,
                e.g. a non-positive probe rate.
        """
        values = {
            "name": name,
            "endpoint": name + Config.PROBE_ENDPOINT_SUFFIX,
            "access_key": Config.S3_ACCESS_KEY,
            "secret_key": Config.S3_SECRET_KEY,
            "latency_bucket_name": Config.LATENCY_BUCKET_NAME,
            "durability_bucket_name": Config.DURABILITY_BUCKET_NAME,
            "probe_rate_per_min": Config.PROBE_RATE_PER_MIN,
            "durability_item_total": Config.DURABILITY_ITEM_TOTAL,
            "durability_sample_size": Config.DURABILITY_SAMPLE_SIZE,
            "secure": Config.S3_SECURE,
            "region": Config.S3_REGION,
            "seed_retry": RetryPolicy(
                max_attempts=Config.SEED_MAX_ATTEMPTS,
                base_delay=Config.SEED_BASE_DELAY,
                max_delay=Config.SEED_MAX_DELAY,
                max_duration=Config.SEED_MAX_DURATION,
            ),
        }
        values.update(overrides)
        return ProbeConfig(**values)

    @staticmethod
    def create_probe(config: ProbeConfig, sink: MetricsSink) -> Probe:
        """
        Create a probe with its own boto3 storage client.

        Args:
            config (ProbeConfig): Configuration of the probe.
            sink (MetricsSink): Sink shared by all probes of the process.

        Returns:
            Probe: A probe ready to run.
        """
        client = BotoStorageClient(
            endpoint_url=config.endpoint_url,
            access_key=config.access_key,
            secret_key=config.secret_key,
            region=config.region,
        )
        return Probe(config, client, sink)

    @staticmethod
    def create_probes(sink: MetricsSink, names: Optional[List[str]] = None) -> List[Probe]:
        names = Config.PROBE_NAMES if names is None else names
        logger.info(f"Creating probes for: {names}")
        return [ProbeFactory.create_probe(ProbeFactory.build_config(n), sink) for n in names]
