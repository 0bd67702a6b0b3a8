"""launchboard: SpaceX launch and company viewer."""

__version__ = "0.1.0"
