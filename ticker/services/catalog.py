"""Token catalog loader for the CoinGecko-style coins list."""
from pathlib import Path
from typing import Union

from pydantic import TypeAdapter, ValidationError

from ticker.logging import get_logger, TimedOperation
from ticker.schemas import CatalogEntry, TokenDescriptor
from ticker import metrics

logger = get_logger(__name__)

# Symbols whose CoinGecko id is not simply the lower-cased symbol
CANONICAL_IDS = {
    "eth": "ethereum",
    "wbtc": "wrapped-bitcoin",
    "bat": "basic-attention-token",
}

_entries_adapter = TypeAdapter(list[CatalogEntry])


class CatalogError(Exception):
    """Raised when the token catalog cannot be loaded."""
    def __init__(self, path: Union[str, Path], detail: str):
        self.path = str(path)
        self.detail = detail
        super().__init__(f"Cannot load token catalog {self.path}: {detail}")


def canonical_id(symbol: str) -> str:
    """Map a lower-cased symbol to its canonical id."""
    return CANONICAL_IDS.get(symbol, symbol)


def to_descriptor(entry: CatalogEntry) -> TokenDescriptor:
    """Build the coins-list descriptor for one catalog entry."""
    symbol = entry.symbol.lower()
    address = entry.address.lower()
    return TokenDescriptor(
        id=canonical_id(symbol),
        symbol=symbol,
        name=symbol,
        platforms={"ethereum": address},
    )


def load_catalog(path: Union[str, Path]) -> tuple[TokenDescriptor, ...]:
    """
    Load the token catalog from a JSON file.

    The file must hold a JSON array of objects, each with string fields
    ``symbol`` and ``address``. Other fields are ignored.

    Args:
        path: Location of the catalog file

    Returns:
        Token descriptors in file order

    Raises:
        CatalogError: If the file is missing, unreadable or malformed
    """
    path = Path(path)

    with TimedOperation("catalog_load", logger, path=str(path)):
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise CatalogError(path, f"unreadable file ({e.strerror or e})") from e

        try:
            entries = _entries_adapter.validate_json(raw)
        except ValidationError as e:
            raise CatalogError(path, f"malformed catalog ({e.error_count()} errors): {e}") from e

        tokens = tuple(to_descriptor(entry) for entry in entries)

    metrics.set_catalog_size(len(tokens))
    logger.info("catalog_loaded", path=str(path), token_count=len(tokens))

    return tokens
