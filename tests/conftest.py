"""
Pytest configuration and shared fixtures for RFP Bid Agent tests.

Provides:
- Requirement sets and catalog entries for the matching engine
- Environment isolation for Config
"""
import pytest

from rfp_bid_agent.models import OEMSKU, ProductSpec, TechnicalSpec


def make_product(name, *specs):
    """Build a ProductSpec from (parameter, value[, unit]) tuples."""
    return ProductSpec(product_name=name, specifications=tuple(TechnicalSpec(*spec) for spec in specs))


def make_sku(sku, *specs, category="Power Cables", name=None):
    """Build an OEMSKU from (parameter, value[, unit]) tuples."""
    return OEMSKU(
        sku=sku,
        product_name=name or f"Product {sku}",
        category=category,
        specifications=tuple(TechnicalSpec(*spec) for spec in specs),
    )


@pytest.fixture
def cable_requirement():
    return make_product(
        "Cable",
        ("Voltage Rating", "11", "kV"),
        ("Conductor Material", "Aluminum"),
    )


@pytest.fixture
def copper_cable():
    return make_sku(
        "SKU-CU",
        ("Voltage Rating", "11", "kV"),
        ("Conductor Material", "Copper"),
    )


@pytest.fixture
def sample_product_specs():
    """Two RFP products shaped like the sales agent output."""
    return [
        make_product(
            "11kV XLPE Power Cable",
            ("Voltage Rating", "11", "kV"),
            ("Insulation", "Cross-Linked Polyethylene"),
            ("Conductor Material", "Aluminium"),
            ("Conductor Size", "240", "sq.mm"),
            ("Number of Cores", "3"),
            ("Sheath Material", "PVC"),
        ),
        make_product(
            "Distribution Transformer",
            ("Capacity", "1000", "kVA"),
            ("Primary Voltage", "11", "kV"),
            ("Cooling", "Oil Natural Air Natural"),
            ("Frequency", "50", "Hz"),
        ),
    ]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove every variable Config reads and point it at an empty .env."""
    for name in ("GOOGLE_API_KEY", "GEMINI_MODEL", "CATALOG_PATH", "SYNONYMS_PATH",
                 "TOP_N", "MAX_WORKERS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
