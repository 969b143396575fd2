"""
Technical Agent Module

Runs the specification-matching engine for every RFP product and picks
the SKU that goes forward to pricing.
"""

import concurrent.futures
import logging
from typing import List, Optional, Sequence, Tuple

from rfp_bid_agent.catalog import OEM_CATALOG
from rfp_bid_agent.models import OEMSKU, ProductSpec, SpecMatchResult, TopMatches
from rfp_bid_agent.spec_matcher import DEFAULT_TOP_N, find_top_matches
from rfp_bid_agent.synonyms import SynonymTable

logger = logging.getLogger(__name__)

EXCELLENT_MATCH_THRESHOLD = 90
GOOD_MATCH_THRESHOLD = 70


class TechnicalAgent:
    """Matches RFP product specifications against the OEM catalog."""

    def __init__(self, catalog: Sequence[OEMSKU] = OEM_CATALOG, top_n: int = DEFAULT_TOP_N,
                 synonyms: Optional[SynonymTable] = None, max_workers: int = 1):
        """
        Initialize the Technical Agent.

        Args:
            catalog: OEM catalog to match against (never modified)
            top_n: Number of candidates kept per product
            synonyms: Synonym table (defaults to the built-in classes)
            max_workers: Threads used to match independent products
        """
        self.catalog = catalog
        self.top_n = top_n
        self.synonyms = synonyms
        self.max_workers = max(1, max_workers)

    def _match_product(self, product_spec: ProductSpec) -> TopMatches:
        top_matches = find_top_matches(product_spec, self.catalog, self.top_n, self.synonyms)
        result = TopMatches.from_results(product_spec.product_name, top_matches)
        logger.debug(
            "Matched %s -> %s (%d candidates)",
            product_spec.product_name, result.selected_sku or "<none>", len(top_matches),
        )
        return result

    def find_matches(self, product_specs: Sequence[ProductSpec]) -> List[TopMatches]:
        """
        Find the top matching SKUs for each product.

        Products are independent, so with ``max_workers > 1`` they are
        matched in parallel. Output order always follows input order.

        Args:
            product_specs: Requirement sets extracted from the RFP

        Returns:
            One TopMatches per product
        """
        if self.max_workers == 1 or len(product_specs) < 2:
            return [self._match_product(spec) for spec in product_specs]

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(self._match_product, product_specs))

    def analyze_match(self, product_spec: ProductSpec) -> Tuple[List[SpecMatchResult], str]:
        """
        Get a match analysis with a human-readable recommendation.

        Returns:
            Tuple of (top matches, recommendation text)
        """
        top_matches = find_top_matches(product_spec, self.catalog, self.top_n, self.synonyms)

        if not top_matches:
            return top_matches, "No matching products found in OEM catalog."

        best = top_matches[0]
        if best.spec_match_percentage >= EXCELLENT_MATCH_THRESHOLD:
            recommendation = (
                f"Excellent match found: {best.product_name} with "
                f"{best.spec_match_percentage}% specification match."
            )
        elif best.spec_match_percentage >= GOOD_MATCH_THRESHOLD:
            recommendation = (
                f"Good match found: {best.product_name} with "
                f"{best.spec_match_percentage}% specification match. Minor differences exist."
            )
        else:
            recommendation = (
                f"Partial match found: {best.product_name} with "
                f"{best.spec_match_percentage}% specification match. "
                "Significant differences exist - review required."
            )

        return top_matches, recommendation

    def evaluate_rfp(self, product_specs: Sequence[ProductSpec]) -> List[TopMatches]:
        """Complete technical evaluation workflow."""
        return self.find_matches(product_specs)
