"""Service layer for the dev ticker server."""
from ticker.services.catalog import CatalogError, load_catalog
from ticker.services.faults import FaultDecision, FaultInjector
from ticker.services.pricing import PriceSynthesizer

__all__ = ["CatalogError", "load_catalog", "FaultDecision", "FaultInjector", "PriceSynthesizer"]
