"""Exception hierarchy for the exporter."""


class ExporterError(Exception):
    """Base class for all exporter errors."""


class DataSourceError(ExporterError):
    """A statistic could not be fetched from the upstream data source."""


class ReductionError(ExporterError):
    """A statistic series reduced to a value that cannot be exported."""

    def __init__(self, statistic: str, value: float) -> None:
        super().__init__(f"{statistic} reduced to non-finite value {value!r}")
        self.statistic = statistic
        self.value = value
