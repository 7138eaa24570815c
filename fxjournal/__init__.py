"""FX Journal - forex trading journal with performance analytics and risk sizing."""

__version__ = "0.1.0"
