"""In-memory metric sink."""

from collections.abc import Iterable

from ucdn_exporter.core.models import MetricDescriptor, ReducedObservation


class InMemoryMetricSink:
    """In-memory implementation of MetricSinkPort.

    Keeps the described catalog and every written observation in lists.
    Suitable for testing and for embedding the aggregator in other code.
    """

    def __init__(self) -> None:
        self.descriptors: list[MetricDescriptor] = []
        self.observations: list[ReducedObservation] = []

    def describe(self, descriptors: Iterable[MetricDescriptor]) -> None:
        """Record the fixed set of metric descriptors."""
        self.descriptors = list(descriptors)

    def write(self, observation: ReducedObservation) -> None:
        """Record one observation."""
        self.observations.append(observation)

    def values(self, fq_name: str) -> dict[tuple[str, ...], float]:
        """Return observed values of one metric keyed by label values."""
        return {
            o.label_values: o.value
            for o in self.observations
            if o.descriptor.fq_name == fq_name
        }

    def clear(self) -> None:
        """Forget every recorded observation, keeping the descriptors."""
        self.observations.clear()
