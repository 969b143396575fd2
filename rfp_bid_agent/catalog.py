"""
OEM Catalog Module

Built-in OEM product catalog plus helpers to look up SKUs and to load an
alternative catalog from CSV or YAML.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd
import yaml

from rfp_bid_agent.models import OEMSKU, TechnicalSpec

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["sku", "product_name", "category", "parameter", "value", "unit"]


def _spec(parameter: str, value: str, unit: str = "") -> TechnicalSpec:
    return TechnicalSpec(parameter=parameter, value=value, unit=unit)


OEM_CATALOG: Tuple[OEMSKU, ...] = (
    # 11kV XLPE cables
    OEMSKU(
        sku="SKU-XLPE-11KV-A",
        product_name="11kV XLPE Power Cable - Premium",
        category="Power Cables",
        specifications=(
            _spec("Voltage Rating", "11", "kV"),
            _spec("Insulation Type", "XLPE"),
            _spec("Conductor Material", "Aluminum"),
            _spec("Conductor Size", "240", "sq.mm"),
            _spec("Number of Cores", "3"),
            _spec("Temperature Rating", "90", "°C"),
            _spec("Sheath Material", "PVC"),
            _spec("Armoring", "Steel Wire Armored"),
            _spec("Standard", "IS 7098"),
        ),
    ),
    OEMSKU(
        sku="SKU-XLPE-11KV-B",
        product_name="11kV XLPE Power Cable - Standard",
        category="Power Cables",
        specifications=(
            _spec("Voltage Rating", "11", "kV"),
            _spec("Insulation Type", "XLPE"),
            _spec("Conductor Material", "Copper"),
            _spec("Conductor Size", "185", "sq.mm"),
            _spec("Number of Cores", "3"),
            _spec("Temperature Rating", "90", "°C"),
            _spec("Sheath Material", "LSZH"),
            _spec("Armoring", "Steel Wire Armored"),
            _spec("Standard", "IS 7098"),
        ),
    ),
    OEMSKU(
        sku="SKU-XLPE-11KV-C",
        product_name="11kV XLPE Power Cable - Economy",
        category="Power Cables",
        specifications=(
            _spec("Voltage Rating", "11", "kV"),
            _spec("Insulation Type", "XLPE"),
            _spec("Conductor Material", "Aluminum"),
            _spec("Conductor Size", "150", "sq.mm"),
            _spec("Number of Cores", "3"),
            _spec("Temperature Rating", "85", "°C"),
            _spec("Sheath Material", "PVC"),
            _spec("Armoring", "Galvanized Steel Tape"),
            _spec("Standard", "IS 7098"),
        ),
    ),
    # 33kV XLPE cables
    OEMSKU(
        sku="SKU-XLPE-33KV-A",
        product_name="33kV XLPE Power Cable - Premium",
        category="Power Cables",
        specifications=(
            _spec("Voltage Rating", "33", "kV"),
            _spec("Insulation Type", "XLPE"),
            _spec("Conductor Material", "Copper"),
            _spec("Conductor Size", "400", "sq.mm"),
            _spec("Number of Cores", "3"),
            _spec("Temperature Rating", "90", "°C"),
            _spec("Sheath Material", "LSZH"),
            _spec("Armoring", "Double Steel Wire Armored"),
            _spec("Standard", "IS 7098"),
        ),
    ),
    # Transformers
    OEMSKU(
        sku="SKU-XFMR-1000KVA-A",
        product_name="1000 kVA Distribution Transformer",
        category="Transformers",
        specifications=(
            _spec("Capacity", "1000", "kVA"),
            _spec("Primary Voltage", "11", "kV"),
            _spec("Secondary Voltage", "433", "V"),
            _spec("Cooling Type", "ONAN"),
            _spec("Insulation Class", "A"),
            _spec("Frequency", "50", "Hz"),
            _spec("Efficiency", "98.5", "%"),
            _spec("Standard", "IS 1180"),
        ),
    ),
    OEMSKU(
        sku="SKU-XFMR-1500KVA-A",
        product_name="1500 kVA Distribution Transformer",
        category="Transformers",
        specifications=(
            _spec("Capacity", "1500", "kVA"),
            _spec("Primary Voltage", "11", "kV"),
            _spec("Secondary Voltage", "433", "V"),
            _spec("Cooling Type", "ONAN"),
            _spec("Insulation Class", "A"),
            _spec("Frequency", "50", "Hz"),
            _spec("Efficiency", "98.7", "%"),
            _spec("Standard", "IS 1180"),
        ),
    ),
    # Switchgear
    OEMSKU(
        sku="SKU-SWGR-11KV-VCB",
        product_name="11kV Vacuum Circuit Breaker Panel",
        category="Switchgear",
        specifications=(
            _spec("Voltage Rating", "11", "kV"),
            _spec("Current Rating", "630", "A"),
            _spec("Breaking Capacity", "25", "kA"),
            _spec("Type", "VCB"),
            _spec("Number of Poles", "3"),
            _spec("Insulation Type", "SF6"),
            _spec("Standard", "IS 13118"),
        ),
    ),
    OEMSKU(
        sku="SKU-SWGR-11KV-ACB",
        product_name="11kV Air Circuit Breaker Panel",
        category="Switchgear",
        specifications=(
            _spec("Voltage Rating", "11", "kV"),
            _spec("Current Rating", "800", "A"),
            _spec("Breaking Capacity", "31.5", "kA"),
            _spec("Type", "ACB"),
            _spec("Number of Poles", "3"),
            _spec("Insulation Type", "Air"),
            _spec("Standard", "IS 13118"),
        ),
    ),
    # Control panels
    OEMSKU(
        sku="SKU-CTRL-LT-PANEL-A",
        product_name="LT Control Panel - 415V",
        category="Control Panels",
        specifications=(
            _spec("Voltage Rating", "415", "V"),
            _spec("Current Rating", "400", "A"),
            _spec("Number of Outgoing Feeders", "8"),
            _spec("Protection Type", "MCB + MCCB"),
            _spec("Enclosure Rating", "IP54"),
            _spec("Standard", "IS 8623"),
        ),
    ),
)


def validate_catalog(catalog: Sequence[OEMSKU]) -> None:
    """
    Check catalog invariants.

    Raises:
        ValueError: If two entries share a SKU
    """
    seen = set()
    for product in catalog:
        if product.sku in seen:
            raise ValueError(f"Duplicate SKU in catalog: {product.sku}")
        seen.add(product.sku)


def get_products_by_category(category: str, catalog: Sequence[OEMSKU] = OEM_CATALOG) -> List[OEMSKU]:
    """Get catalog products in a category."""
    return [product for product in catalog if product.category == category]


def get_product_by_sku(sku: str, catalog: Sequence[OEMSKU] = OEM_CATALOG) -> Optional[OEMSKU]:
    """Get a catalog product by SKU, or None if it is not listed."""
    return next((product for product in catalog if product.sku == sku), None)


def search_products(query: str, catalog: Sequence[OEMSKU] = OEM_CATALOG) -> List[OEMSKU]:
    """Search products by name or SKU (case-insensitive substring)."""
    lower_query = query.lower()
    return [
        product for product in catalog
        if lower_query in product.product_name.lower() or lower_query in product.sku.lower()
    ]


def load_catalog_csv(csv_path: Union[str, Path]) -> Tuple[OEMSKU, ...]:
    """
    Load a catalog from a long-format CSV file.

    Each row holds one parameter of one SKU, with the columns
    sku, product_name, category, parameter, value and unit. Rows of a SKU
    keep their file order; SKUs are ordered by first appearance.

    Args:
        csv_path: Path to the CSV file

    Returns:
        Tuple of catalog entries
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)

    missing = [col for col in CSV_COLUMNS if col not in df.columns and col != "unit"]
    if missing:
        raise ValueError(f"Catalog CSV is missing columns: {', '.join(missing)}")
    if "unit" not in df.columns:
        df["unit"] = ""

    entries: Dict[str, Dict[str, Any]] = {}
    for _, row in df.iterrows():
        sku = row["sku"].strip()
        entry = entries.setdefault(sku, {
            "product_name": row["product_name"],
            "category": row["category"],
            "specifications": [],
        })
        if (entry["product_name"], entry["category"]) != (row["product_name"], row["category"]):
            raise ValueError(
                f"Duplicate SKU in catalog: {sku} is listed as both "
                f"'{entry['product_name']}' ({entry['category']}) and "
                f"'{row['product_name']}' ({row['category']})"
            )
        if row["parameter"]:
            entry["specifications"].append(
                _spec(row["parameter"], row["value"], row["unit"])
            )

    catalog = tuple(
        OEMSKU(
            sku=sku,
            product_name=entry["product_name"],
            category=entry["category"],
            specifications=tuple(entry["specifications"]),
        )
        for sku, entry in entries.items()
    )
    logger.info("Loaded %d SKUs from %s", len(catalog), csv_path)
    return catalog


def load_catalog_yaml(yaml_path: Union[str, Path]) -> Tuple[OEMSKU, ...]:
    """Load a catalog from a YAML list of SKU mappings (camelCase keys)."""
    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("catalog", [])
    if not isinstance(data, list):
        raise ValueError(f"Catalog file {yaml_path} must contain a list of SKUs")

    catalog = tuple(OEMSKU.from_dict(item) for item in data)
    validate_catalog(catalog)
    logger.info("Loaded %d SKUs from %s", len(catalog), yaml_path)
    return catalog


def load_catalog(path: Union[str, Path, None] = None) -> Tuple[OEMSKU, ...]:
    """
    Load a catalog file, or return the built-in catalog when no path is given.

    Args:
        path: A .csv, .yaml or .yml file

    Returns:
        Tuple of catalog entries
    """
    if not path:
        return OEM_CATALOG

    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return load_catalog_csv(path)
    if suffix in (".yaml", ".yml"):
        return load_catalog_yaml(path)
    raise ValueError(f"Unsupported catalog format: {path}")
