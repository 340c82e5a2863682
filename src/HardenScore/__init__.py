"""HardenScore - issue definition and scoring engine for hardening exercises."""

__version__ = "0.3.0"
