"""
RFP Bid Agent - drafts priced bids for B2B equipment RFPs.

This package extracts structured requirements from RFP text with Gemini,
matches the requested products against an OEM catalog using the
specification-matching engine, and prices the selected SKUs.
"""

from rfp_bid_agent.models import (
    OEMSKU,
    ParameterComparisonRow,
    ProductSpec,
    SpecMatchResult,
    TechnicalSpec,
    TopMatches,
)
from rfp_bid_agent.spec_matcher import (
    calculate_spec_match,
    find_matching_parameter,
    find_top_matches,
    get_best_match,
    values_match,
)

__version__ = "0.1.0"

__all__ = [
    "OEMSKU",
    "ParameterComparisonRow",
    "ProductSpec",
    "SpecMatchResult",
    "TechnicalSpec",
    "TopMatches",
    "calculate_spec_match",
    "find_matching_parameter",
    "find_top_matches",
    "get_best_match",
    "values_match",
]
