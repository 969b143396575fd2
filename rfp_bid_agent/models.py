"""
Data Models

Value objects passed between the sales, technical and pricing stages.
All of them are frozen; every stage builds new instances instead of
mutating its inputs. ``to_dict`` uses the camelCase keys of the JSON
exchanged with the LLM and written to reports.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class TechnicalSpec:
    """One named attribute with a textual value and optional unit."""
    parameter: str
    value: str
    unit: str = ""

    @property
    def display_value(self) -> str:
        """Value and unit joined by a space, unit omitted when empty."""
        return f"{self.value} {self.unit}" if self.unit else self.value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TechnicalSpec":
        """
        Build a spec from a dict, tolerating LLM quirks.

        A missing or null unit becomes "" and numeric values are stringified.
        """
        if "parameter" not in data:
            raise ValueError(f"Specification entry has no 'parameter': {data!r}")
        return cls(
            parameter=_as_text(data["parameter"]),
            value=_as_text(data.get("value")),
            unit=_as_text(data.get("unit")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"parameter": self.parameter, "value": self.value, "unit": self.unit}


def _specs_from_list(items: Any) -> Tuple[TechnicalSpec, ...]:
    if items is None:
        return ()
    if not isinstance(items, list):
        raise ValueError("'specifications' must be a list")
    return tuple(TechnicalSpec.from_dict(item) for item in items)


@dataclass(frozen=True)
class ProductSpec:
    """Requirement set for one RFP line item."""
    product_name: str
    specifications: Tuple[TechnicalSpec, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductSpec":
        if "productName" not in data:
            raise ValueError(f"Product entry has no 'productName': {data!r}")
        return cls(
            product_name=_as_text(data["productName"]),
            specifications=_specs_from_list(data.get("specifications")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productName": self.product_name,
            "specifications": [spec.to_dict() for spec in self.specifications],
        }


@dataclass(frozen=True)
class OEMSKU:
    """One catalog offering, identified by its unique ``sku``."""
    sku: str
    product_name: str
    category: str
    specifications: Tuple[TechnicalSpec, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OEMSKU":
        missing = [key for key in ("sku", "productName", "category") if key not in data]
        if missing:
            raise ValueError(f"Catalog entry is missing {', '.join(missing)}: {data!r}")
        return cls(
            sku=_as_text(data["sku"]),
            product_name=_as_text(data["productName"]),
            category=_as_text(data["category"]),
            specifications=_specs_from_list(data.get("specifications")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sku": self.sku,
            "productName": self.product_name,
            "category": self.category,
            "specifications": [spec.to_dict() for spec in self.specifications],
        }


@dataclass(frozen=True)
class ParameterComparisonRow:
    parameter: str
    rfp_value: str
    oem_value: str
    matches: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parameter": self.parameter,
            "rfpValue": self.rfp_value,
            "oemValue": self.oem_value,
            "matches": self.matches,
        }


@dataclass(frozen=True)
class SpecMatchResult:
    """Score of one requirement set against one catalog SKU."""
    sku: str
    product_name: str
    spec_match_percentage: int
    matching_params: int
    total_params: int
    comparison_table: Tuple[ParameterComparisonRow, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sku": self.sku,
            "productName": self.product_name,
            "specMatchPercentage": self.spec_match_percentage,
            "matchingParams": self.matching_params,
            "totalParams": self.total_params,
            "comparisonTable": [row.to_dict() for row in self.comparison_table],
        }


@dataclass(frozen=True)
class TopMatches:
    """Ranked candidates for one RFP product and the SKU picked for pricing."""
    product_name: str
    top_matches: Tuple[SpecMatchResult, ...] = ()
    selected_sku: str = ""

    @classmethod
    def from_results(cls, product_name: str, results: Sequence[SpecMatchResult]) -> "TopMatches":
        results = tuple(results)
        return cls(
            product_name=product_name,
            top_matches=results,
            selected_sku=results[0].sku if results else "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productName": self.product_name,
            "topMatches": [result.to_dict() for result in self.top_matches],
            "selectedSKU": self.selected_sku,
        }


@dataclass(frozen=True)
class RFPSummary:
    """Headline facts the sales agent pulls out of an RFP."""
    rfp_name: str
    due_date: str
    products: Tuple[str, ...] = ()
    tests: Tuple[str, ...] = ()
    raw_text: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], raw_text: str = "") -> "RFPSummary":
        missing = [key for key in ("rfpName", "dueDate", "products", "tests") if key not in data]
        if missing:
            raise ValueError(f"RFP summary is missing {', '.join(missing)}")
        for key in ("products", "tests"):
            if not isinstance(data[key], list):
                raise ValueError(f"RFP summary field '{key}' must be a list")
        return cls(
            rfp_name=_as_text(data["rfpName"]),
            due_date=_as_text(data["dueDate"]),
            products=tuple(_as_text(p) for p in data["products"]),
            tests=tuple(_as_text(t) for t in data["tests"]),
            raw_text=raw_text,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rfpName": self.rfp_name,
            "dueDate": self.due_date,
            "products": list(self.products),
            "tests": list(self.tests),
            "rawText": self.raw_text,
        }


@dataclass(frozen=True)
class TestingCost:
    # Keeps pytest from collecting this class as a test case
    __test__ = False

    test_name: str
    cost: float

    def to_dict(self) -> Dict[str, Any]:
        return {"testName": self.test_name, "cost": self.cost}


@dataclass(frozen=True)
class PricingResult:
    sku: str
    product_name: str
    unit_price: float
    quantity: int
    material_cost: float
    testing_costs: Tuple[TestingCost, ...]
    total_testing_cost: float
    total_cost: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sku": self.sku,
            "productName": self.product_name,
            "unitPrice": self.unit_price,
            "quantity": self.quantity,
            "materialCost": self.material_cost,
            "testingCosts": [cost.to_dict() for cost in self.testing_costs],
            "totalTestingCost": self.total_testing_cost,
            "totalCost": self.total_cost,
        }


@dataclass(frozen=True)
class FinalRFPResponse:
    """Consolidated bid produced by the orchestrator."""
    rfp_summary: RFPSummary
    technical_matches: Tuple[TopMatches, ...]
    pricing: Tuple[PricingResult, ...]
    total_bid_value: float
    generated_at: str
    metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self, include_raw_text: bool = False) -> Dict[str, Any]:
        summary = self.rfp_summary.to_dict()
        if not include_raw_text:
            summary.pop("rawText", None)
        return {
            "rfpSummary": summary,
            "technicalMatches": [match.to_dict() for match in self.technical_matches],
            "pricing": [result.to_dict() for result in self.pricing],
            "totalBidValue": self.total_bid_value,
            "generatedAt": self.generated_at,
            "metrics": dict(self.metrics),
        }


def product_specs_from_list(items: List[Dict[str, Any]]) -> List[ProductSpec]:
    """Parse a JSON list of product requirement dicts."""
    if not isinstance(items, list):
        raise ValueError("Expected a list of product specifications")
    return [ProductSpec.from_dict(item) for item in items]
