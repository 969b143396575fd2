import pytest

from rfp_bid_agent.catalog import (
    OEM_CATALOG,
    get_product_by_sku,
    get_products_by_category,
    load_catalog,
    search_products,
    validate_catalog,
)
from rfp_bid_agent.models import TechnicalSpec
from tests.conftest import make_sku


class TestBuiltinCatalog:

    def test_skus_are_unique(self):
        validate_catalog(OEM_CATALOG)
        assert len({product.sku for product in OEM_CATALOG}) == len(OEM_CATALOG) == 9

    def test_get_product_by_sku(self):
        product = get_product_by_sku("SKU-XFMR-1000KVA-A")
        assert product.product_name == "1000 kVA Distribution Transformer"
        assert get_product_by_sku("SKU-UNKNOWN") is None

    def test_get_products_by_category(self):
        skus = [p.sku for p in get_products_by_category("Switchgear")]
        assert skus == ["SKU-SWGR-11KV-VCB", "SKU-SWGR-11KV-ACB"]

    def test_search_products(self):
        assert len(search_products("xlpe")) == 4
        assert [p.sku for p in search_products("panel-a")] == ["SKU-CTRL-LT-PANEL-A"]
        assert search_products("nothing like this") == []

    def test_duplicate_skus_rejected(self):
        with pytest.raises(ValueError, match="SKU-1"):
            validate_catalog([make_sku("SKU-1"), make_sku("SKU-2"), make_sku("SKU-1")])


class TestLoadCatalog:

    def test_default_is_builtin(self):
        assert load_catalog() is OEM_CATALOG
        assert load_catalog("") is OEM_CATALOG

    def test_csv(self, tmp_path):
        path = tmp_path / "catalog.csv"
        path.write_text(
            "sku,product_name,category,parameter,value,unit\n"
            "SKU-1,Cable One,Power Cables,Voltage Rating,11,kV\n"
            "SKU-2,Panel,Control Panels,Enclosure Rating,IP54,\n"
            "SKU-1,Cable One,Power Cables,Conductor Material,Copper,\n",
            encoding="utf-8",
        )

        catalog = load_catalog(path)

        assert [p.sku for p in catalog] == ["SKU-1", "SKU-2"]
        assert catalog[0].specifications == (
            TechnicalSpec("Voltage Rating", "11", "kV"),
            TechnicalSpec("Conductor Material", "Copper", ""),
        )
        assert catalog[1].specifications == (TechnicalSpec("Enclosure Rating", "IP54", ""),)

    def test_csv_missing_columns(self, tmp_path):
        path = tmp_path / "catalog.csv"
        path.write_text("sku,parameter,value\nSKU-1,Voltage,11\n", encoding="utf-8")

        with pytest.raises(ValueError, match="product_name"):
            load_catalog(path)

    def test_csv_conflicting_rows_for_one_sku(self, tmp_path):
        path = tmp_path / "catalog.csv"
        path.write_text(
            "sku,product_name,category,parameter,value,unit\n"
            "SKU-1,Cable A,Power Cables,Voltage Rating,11,kV\n"
            "SKU-1,Transformer B,Transformers,Capacity,1000,kVA\n",
            encoding="utf-8",
        )

        with pytest.raises(ValueError, match="Duplicate SKU in catalog: SKU-1"):
            load_catalog(path)

    def test_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "catalog:\n"
            "  - sku: SKU-1\n"
            "    productName: Cable One\n"
            "    category: Power Cables\n"
            "    specifications:\n"
            "      - {parameter: Voltage Rating, value: 11, unit: kV}\n"
            "      - {parameter: Insulation Type, value: XLPE}\n",
            encoding="utf-8",
        )

        catalog = load_catalog(path)

        assert len(catalog) == 1
        assert catalog[0].specifications[0] == TechnicalSpec("Voltage Rating", "11", "kV")
        assert catalog[0].specifications[1].unit == ""

    def test_yaml_duplicate_skus(self, tmp_path):
        path = tmp_path / "catalog.yml"
        path.write_text(
            "- {sku: SKU-1, productName: A, category: C}\n"
            "- {sku: SKU-1, productName: B, category: C}\n",
            encoding="utf-8",
        )

        with pytest.raises(ValueError, match="Duplicate SKU"):
            load_catalog(path)

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported"):
            load_catalog(tmp_path / "catalog.xlsx")
