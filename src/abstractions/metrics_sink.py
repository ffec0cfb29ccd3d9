from abc import ABC, abstractmethod

from contracts.measurement import MeasurementOutcome


class MetricsSink(ABC):
    """
    Abstract base class for destinations of probe measurements.

    Implementations must accept concurrent calls from several check tasks.
    """

    @abstractmethod
    def record(self, outcome: MeasurementOutcome) -> None:
        """
        Record one measurement.

        Every call counts a request and observes its latency; a request is
        counted as successful only when ``outcome.success`` is set.

        Args:
            outcome (MeasurementOutcome): The measurement to record.
        """
