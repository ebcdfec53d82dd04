class ExporterError(Exception):
    """Base error for bgpexporter exceptions."""


class AcquisitionError(ExporterError):
    """Raised when router output could not be obtained."""


class ConfigError(ExporterError):
    """Raised when exporter settings are invalid."""
