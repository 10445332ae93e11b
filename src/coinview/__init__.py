"""coinview: cryptocurrency market data service with fail-soft upstream providers."""

__version__ = "0.1.0"
