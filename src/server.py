import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from config.config import Config
from config.logging_config import setup_logging
from contracts.probe_state import HealthResponse, ProbeState
from core.probe import Probe
from core.probe_factory import ProbeFactory
from core.prometheus_metrics_sink import PrometheusMetricsSink

setup_logging()
logger = logging.getLogger(__name__)

# All probes of the process report to one sink, labelled by probe name
metrics_sink = PrometheusMetricsSink(CollectorRegistry())

probes: List[Probe] = []
probe_tasks: List[asyncio.Task] = []


def _on_probe_exit(task: asyncio.Task):
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"{task.get_name()} stopped: {exc}")


@asynccontextmanager
async def lifespan(app):
    probes.extend(ProbeFactory.create_probes(metrics_sink))
    for probe in probes:
        task = asyncio.create_task(probe.run(), name=f"probe-{probe.config.name}")
        task.add_done_callback(_on_probe_exit)
        probe_tasks.append(task)
    logger.info(f"Started {len(probes)} probes.")
    yield
    for probe in probes:
        await probe.shutdown(Config.SHUTDOWN_JOIN_TIMEOUT)
    # A probe still preparing its buckets does not observe the stop signal
    for task in probe_tasks:
        task.cancel()
    await asyncio.gather(*probe_tasks, return_exceptions=True)
    probes.clear()
    probe_tasks.clear()
    logger.info("All probes stopped.")


app = FastAPI(lifespan=lifespan)


@app.get("/metrics")
def metrics():
    return Response(generate_latest(metrics_sink.registry), media_type=CONTENT_TYPE_LATEST)


@app.get("/healthz", response_model=HealthResponse)
async def healthz():
    statuses = [probe.status() for probe in probes]
    failed = any(s.state == ProbeState.FAILED for s in statuses)
    return HealthResponse(status="degraded" if failed else "ok", probes=statuses)


logger.info("Probe server module loaded and logging is configured.")
