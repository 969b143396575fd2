"""
RFP Processor Module

This module loads RFP requirement files and saves match results and bids
as CSV or JSON.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from rfp_bid_agent.models import (
    FinalRFPResponse,
    ProductSpec,
    SpecMatchResult,
    TopMatches,
    product_specs_from_list,
)

COMPARISON_COLUMNS = [
    "rfp_product", "rank", "sku", "product_name", "spec_match_percentage",
    "parameter", "rfp_value", "oem_value", "matches",
]


def comparison_to_dataframe(result: SpecMatchResult) -> pd.DataFrame:
    """One row per compared parameter of a single match result."""
    return pd.DataFrame(
        [
            {
                "parameter": row.parameter,
                "rfp_value": row.rfp_value,
                "oem_value": row.oem_value,
                "matches": row.matches,
            }
            for row in result.comparison_table
        ],
        columns=["parameter", "rfp_value", "oem_value", "matches"],
    )


def matches_to_dataframe(technical_matches: Sequence[TopMatches]) -> pd.DataFrame:
    """
    Flatten technical matches into a long table.
    
    Args:
        technical_matches: Output of the technical agent
        
    Returns:
        DataFrame with one row per (product, candidate, parameter)
    """
    records = []
    for top in technical_matches:
        for rank, result in enumerate(top.top_matches, 1):
            for row in result.comparison_table:
                records.append({
                    "rfp_product": top.product_name,
                    "rank": rank,
                    "sku": result.sku,
                    "product_name": result.product_name,
                    "spec_match_percentage": result.spec_match_percentage,
                    "parameter": row.parameter,
                    "rfp_value": row.rfp_value,
                    "oem_value": row.oem_value,
                    "matches": row.matches,
                })
    return pd.DataFrame(records, columns=COMPARISON_COLUMNS)


class RFPProcessor:
    """Loads RFP product requirements and writes matching results."""
    
    def __init__(self):
        """Initialize the RFP Processor."""
        self.product_specs: List[ProductSpec] = []
        
    def load_product_specs(self, json_path: Union[str, Path]) -> List[ProductSpec]:
        """
        Load product requirements from a JSON file.
        
        The file holds either a list of products or an object with a
        "productSpecs" list, each product shaped like
        {"productName": ..., "specifications": [{"parameter", "value", "unit"}]}.
        
        Args:
            json_path: Path to the JSON file
            
        Returns:
            List of ProductSpec
        """
        with open(json_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        
        if isinstance(data, dict):
            if "productSpecs" in data:
                data = data["productSpecs"]
            elif "productName" in data:
                data = [data]
        
        self.product_specs = product_specs_from_list(data)
        return self.product_specs
    
    def get_product_specs(self) -> List[ProductSpec]:
        return self.product_specs
    
    def save_matches(self, technical_matches: Sequence[TopMatches], output_path: Union[str, Path]):
        """
        Save the comparison tables of all matches to a CSV file.
        
        Args:
            technical_matches: Output of the technical agent
            output_path: Path to save the output CSV
        """
        df = matches_to_dataframe(technical_matches)
        df.to_csv(output_path, index=False)
        
    def save_response(self, response: Union[FinalRFPResponse, Dict[str, Any]],
                      output_path: Union[str, Path], include_raw_text: bool = False):
        """
        Save a final bid as JSON.
        
        Args:
            response: Orchestrator output (or an already serialized dict)
            output_path: Path to save the JSON file
            include_raw_text: Keep the full RFP text in the summary
        """
        data = response.to_dict(include_raw_text) if isinstance(response, FinalRFPResponse) else response
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
