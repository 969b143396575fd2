"""
Pricing Module

Static pricing tables and the pricing agent that turns selected SKUs and
RFP test requirements into a priced bid.
"""

import logging
from typing import Any, Dict, Iterable, List, Sequence

from rfp_bid_agent.catalog import OEM_CATALOG, get_product_by_sku
from rfp_bid_agent.models import OEMSKU, PricingResult, TestingCost, TopMatches

logger = logging.getLogger(__name__)

# Price per unit for each SKU (cables per meter, others per unit/panel)
UNIT_PRICING_TABLE: Dict[str, float] = {
    "SKU-XLPE-11KV-A": 1250,
    "SKU-XLPE-11KV-B": 1450,
    "SKU-XLPE-11KV-C": 980,
    "SKU-XLPE-33KV-A": 2800,
    "SKU-XFMR-1000KVA-A": 450000,
    "SKU-XFMR-1500KVA-A": 625000,
    "SKU-SWGR-11KV-VCB": 385000,
    "SKU-SWGR-11KV-ACB": 425000,
    "SKU-CTRL-LT-PANEL-A": 125000,
}

TESTING_PRICING_TABLE: Dict[str, float] = {
    # Electrical
    "High Voltage Test": 15000,
    "Insulation Resistance Test": 8000,
    "Partial Discharge Test": 25000,
    "Thermal Aging Test": 35000,
    "Short Circuit Test": 45000,
    # Mechanical
    "Tensile Strength Test": 12000,
    "Elongation Test": 10000,
    "Impact Test": 18000,
    # Environmental
    "Water Immersion Test": 20000,
    "Fire Resistance Test": 30000,
    "UV Resistance Test": 22000,
    # Transformer
    "No Load Loss Test": 18000,
    "Load Loss Test": 20000,
    "Temperature Rise Test": 28000,
    "Impulse Voltage Test": 40000,
    # Switchgear
    "Breaking Capacity Test": 50000,
    "Making Capacity Test": 45000,
    "Mechanical Endurance Test": 35000,
    # Acceptance
    "Type Test": 75000,
    "Routine Test": 25000,
    "Sample Test": 15000,
}

DEFAULT_QUANTITIES: Dict[str, int] = {
    "Power Cables": 1000,  # meters
    "Transformers": 2,
    "Switchgear": 3,
    "Control Panels": 5,
}


def get_unit_price(sku: str) -> float:
    return UNIT_PRICING_TABLE.get(sku, 0)


def get_testing_cost(test_name: str) -> float:
    return TESTING_PRICING_TABLE.get(test_name, 0)


def get_default_quantity(category: str) -> int:
    return DEFAULT_QUANTITIES.get(category, 1)


def calculate_material_cost(sku: str, quantity: int) -> float:
    return get_unit_price(sku) * quantity


def calculate_testing_cost(tests: Iterable[str]) -> float:
    return sum(get_testing_cost(test) for test in tests)


class PricingAgent:
    """Estimates material and testing costs for matched products."""

    def __init__(self, catalog: Sequence[OEMSKU] = OEM_CATALOG):
        """
        Initialize the Pricing Agent.

        Args:
            catalog: Catalog used to resolve selected SKUs
        """
        self.catalog = catalog

    def calculate_pricing(self, technical_matches: Sequence[TopMatches],
                          testing_requirements: Sequence[str]) -> List[PricingResult]:
        """
        Price the selected SKU of every matched product.

        Products whose selected SKU is not in the catalog are logged and
        left out of the result.

        Args:
            technical_matches: Output of the technical agent
            testing_requirements: Test names from the RFP summary

        Returns:
            List of pricing results
        """
        pricing_results = []

        for match in technical_matches:
            sku = match.selected_sku
            product = get_product_by_sku(sku, self.catalog)

            if product is None:
                logger.error("Product not found for SKU: %r (%s)", sku, match.product_name)
                continue

            unit_price = get_unit_price(sku)
            quantity = get_default_quantity(product.category)
            material_cost = calculate_material_cost(sku, quantity)

            testing_costs = tuple(
                TestingCost(test_name=test_name, cost=get_testing_cost(test_name))
                for test_name in testing_requirements
            )
            total_testing_cost = sum(cost.cost for cost in testing_costs)

            pricing_results.append(PricingResult(
                sku=sku,
                product_name=product.product_name,
                unit_price=unit_price,
                quantity=quantity,
                material_cost=material_cost,
                testing_costs=testing_costs,
                total_testing_cost=total_testing_cost,
                total_cost=material_cost + total_testing_cost,
            ))

        return pricing_results

    def calculate_total_bid_value(self, pricing_results: Sequence[PricingResult]) -> float:
        """Sum the total cost of all priced products."""
        return sum(result.total_cost for result in pricing_results)

    def generate_pricing_summary(self, pricing_results: Sequence[PricingResult]) -> Dict[str, Any]:
        """
        Build a material/testing cost breakdown.

        Returns:
            Dict with totalMaterialCost, totalTestingCost, totalBidValue
            and a per-product breakdown
        """
        breakdown = [
            {
                "product": result.product_name,
                "materialCost": result.material_cost,
                "testingCost": result.total_testing_cost,
                "subtotal": result.total_cost,
            }
            for result in pricing_results
        ]
        total_material_cost = sum(r.material_cost for r in pricing_results)
        total_testing_cost = sum(r.total_testing_cost for r in pricing_results)

        return {
            "totalMaterialCost": total_material_cost,
            "totalTestingCost": total_testing_cost,
            "totalBidValue": total_material_cost + total_testing_cost,
            "breakdown": breakdown,
        }

    def generate_pricing(self, technical_matches: Sequence[TopMatches],
                         testing_requirements: Sequence[str]) -> Dict[str, Any]:
        """Complete pricing workflow: per-product pricing plus bid total."""
        pricing = self.calculate_pricing(technical_matches, testing_requirements)
        return {
            "pricing": pricing,
            "totalBidValue": self.calculate_total_bid_value(pricing),
        }
