"""Tests for the token catalog loader."""
import json

import pytest

from ticker.services.catalog import CatalogError, canonical_id, load_catalog


class TestLoadCatalog:
    """Catalog entries become coins-list descriptors."""

    def test_one_descriptor_per_entry_in_file_order(self, catalog):
        assert [token.symbol for token in catalog] == ["eth", "wbtc", "bat", "dai", "mltt"]

    def test_well_known_symbols_map_to_canonical_ids(self, catalog):
        ids = {token.symbol: token.id for token in catalog}
        assert ids["eth"] == "ethereum"
        assert ids["wbtc"] == "wrapped-bitcoin"
        assert ids["bat"] == "basic-attention-token"

    def test_other_symbols_use_lowercased_symbol_as_id(self, catalog):
        ids = {token.symbol: token.id for token in catalog}
        assert ids["dai"] == "dai"
        assert ids["mltt"] == "mltt"

    def test_address_is_lowercased_under_ethereum_platform(self, catalog):
        wbtc = next(token for token in catalog if token.id == "wrapped-bitcoin")
        assert wbtc.platforms == {"ethereum": "0xabc0000000000000000000000000000000000001"}

    def test_name_is_lowercased_symbol(self, catalog):
        for token in catalog:
            assert token.name == token.symbol

    def test_descriptors_are_immutable(self, catalog):
        with pytest.raises(Exception):
            catalog[0].id = "bitcoin"

    def test_extra_fields_are_ignored(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps([
            {"symbol": "GLM", "address": "0xAA", "decimals": 18, "kind": "erc20"},
        ]))

        (token,) = load_catalog(path)

        assert token.model_dump() == {
            "id": "glm",
            "symbol": "glm",
            "name": "glm",
            "platforms": {"ethereum": "0xaa"},
        }

    def test_empty_array_gives_empty_catalog(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text("[]")
        assert load_catalog(path) == ()

    def test_canonical_id_lookup_is_on_lowercased_symbol(self):
        assert canonical_id("eth") == "ethereum"
        assert canonical_id("ETH") == "ETH"


class TestLoadCatalogFailures:
    """A bad catalog file must stop startup."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError) as exc_info:
            load_catalog(tmp_path / "missing.json")
        assert exc_info.value.path.endswith("missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text("[{\"symbol\": ")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"symbol": "ETH", "address": "0x0"}))
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_missing_address(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps([{"symbol": "ETH"}]))
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_non_string_symbol(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps([{"symbol": 42, "address": "0x0"}]))
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_bundled_catalog_loads(self):
        """The sample catalog shipped with the repo is valid."""
        from pathlib import Path

        path = Path(__file__).resolve().parent.parent / "etc" / "tokens" / "localhost.json"
        tokens = load_catalog(path)
        assert "ethereum" in {token.id for token in tokens}
