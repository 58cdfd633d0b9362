"""podqos - report container QoS classes with CPU limits and requests."""

__version__ = "0.1.0"
