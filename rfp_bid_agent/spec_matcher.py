"""
Specification Matching Engine

Scores how well a catalog SKU satisfies a set of free-text technical
requirements. Every requirement parameter carries equal weight.

All functions here are pure: they read their inputs, allocate fresh
results, and keep no state between calls, so they can be called from
several threads at once without locking.
"""

import math
from typing import List, Optional, Sequence

from rfp_bid_agent.models import (
    OEMSKU,
    ParameterComparisonRow,
    ProductSpec,
    SpecMatchResult,
    TechnicalSpec,
)
from rfp_bid_agent.normalizer import extract_number, normalize
from rfp_bid_agent.synonyms import SYNONYM_CLASSES, SynonymTable, same_class

NUMERIC_TOLERANCE = 0.05
NOT_SPECIFIED = "Not Specified"
DEFAULT_TOP_N = 3


def values_match(
    rfp_value: str,
    oem_value: str,
    parameter: str,
    synonyms: Optional[SynonymTable] = None,
) -> bool:
    """
    Check whether a catalog value satisfies a requirement value.

    Rules are tried in order and the first applicable one decides:

    1. Equal after normalization.
    2. Both contain a number: the catalog number must be within 5% of the
       requirement number, measured relative to the requirement. A zero
       requirement number skips this rule.
    3. Both belong to the same synonym class.

    ``parameter`` is part of the signature so per-parameter rules can be
    added later; it does not change rule selection today.

    Args:
        rfp_value: Value requested by the RFP
        oem_value: Value offered by the catalog SKU
        parameter: Name of the requirement parameter being compared
        synonyms: Synonym table to use (defaults to the built-in classes)

    Returns:
        True if the values are considered a match
    """
    rfp_norm = normalize(rfp_value)
    oem_norm = normalize(oem_value)

    if rfp_norm == oem_norm:
        return True

    rfp_num = extract_number(rfp_value)
    oem_num = extract_number(oem_value)

    # Denominator is the requirement's number, not the larger of the two
    if rfp_num is not None and oem_num is not None and rfp_num != 0:
        return abs(rfp_num - oem_num) / rfp_num <= NUMERIC_TOLERANCE

    return same_class(rfp_norm, oem_norm, synonyms if synonyms is not None else SYNONYM_CLASSES)


def find_matching_parameter(
    rfp_param: TechnicalSpec,
    oem_specs: Sequence[TechnicalSpec],
) -> Optional[TechnicalSpec]:
    """
    Find the catalog spec describing the same attribute as a requirement.

    An exact normalized name wins. Otherwise the first catalog spec, in
    declared order, whose name contains or is contained in the requirement
    name is taken. Names that share words without containment, such as
    "Rated Voltage" and "Voltage Rating", are not aligned.
    """
    rfp_param_norm = normalize(rfp_param.parameter)

    for spec in oem_specs:
        if normalize(spec.parameter) == rfp_param_norm:
            return spec

    for spec in oem_specs:
        oem_param_norm = normalize(spec.parameter)
        if oem_param_norm in rfp_param_norm or rfp_param_norm in oem_param_norm:
            return spec

    return None


def _match_percentage(matching_params: int, total_params: int) -> int:
    if total_params == 0:
        return 0
    # Halves round up
    return int(math.floor(matching_params * 100 / total_params + 0.5))


def calculate_spec_match(
    rfp_product: ProductSpec,
    oem_sku: OEMSKU,
    synonyms: Optional[SynonymTable] = None,
) -> SpecMatchResult:
    """
    Score one requirement set against one catalog SKU.

    Produces exactly one comparison row per requirement parameter, in the
    requirement's order. Parameters the SKU does not declare are recorded
    as "Not Specified" and count as non-matches.

    Args:
        rfp_product: Requirement set extracted from the RFP
        oem_sku: Catalog candidate
        synonyms: Synonym table to use (defaults to the built-in classes)

    Returns:
        SpecMatchResult with percentage and comparison table
    """
    comparison_table: List[ParameterComparisonRow] = []
    matching_params = 0
    total_params = len(rfp_product.specifications)

    for rfp_spec in rfp_product.specifications:
        oem_spec = find_matching_parameter(rfp_spec, oem_sku.specifications)

        if oem_spec is None:
            comparison_table.append(ParameterComparisonRow(
                parameter=rfp_spec.parameter,
                rfp_value=rfp_spec.display_value,
                oem_value=NOT_SPECIFIED,
                matches=False,
            ))
            continue

        matches = values_match(rfp_spec.value, oem_spec.value, rfp_spec.parameter, synonyms)
        comparison_table.append(ParameterComparisonRow(
            parameter=rfp_spec.parameter,
            rfp_value=rfp_spec.display_value,
            oem_value=oem_spec.display_value,
            matches=matches,
        ))
        if matches:
            matching_params += 1

    return SpecMatchResult(
        sku=oem_sku.sku,
        product_name=oem_sku.product_name,
        spec_match_percentage=_match_percentage(matching_params, total_params),
        matching_params=matching_params,
        total_params=total_params,
        comparison_table=tuple(comparison_table),
    )


def find_top_matches(
    rfp_product: ProductSpec,
    oem_catalog: Sequence[OEMSKU],
    top_n: int = DEFAULT_TOP_N,
    synonyms: Optional[SynonymTable] = None,
) -> List[SpecMatchResult]:
    """
    Rank the whole catalog against a requirement set.

    Every SKU is scored; results are ordered by match percentage, highest
    first. Equal scores keep catalog order.

    Args:
        rfp_product: Requirement set extracted from the RFP
        oem_catalog: Catalog to scan (not modified)
        top_n: Number of results to return, must be positive
        synonyms: Synonym table to use (defaults to the built-in classes)

    Returns:
        Up to ``top_n`` results
    """
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
        raise ValueError(f"top_n must be a positive integer, got {top_n!r}")

    all_matches = [calculate_spec_match(rfp_product, sku, synonyms) for sku in oem_catalog]

    # sorted() is stable with reverse=True, so ties stay in catalog order
    all_matches = sorted(all_matches, key=lambda result: result.spec_match_percentage, reverse=True)

    return all_matches[:top_n]


def get_best_match(
    rfp_product: ProductSpec,
    oem_catalog: Sequence[OEMSKU],
    synonyms: Optional[SynonymTable] = None,
) -> Optional[SpecMatchResult]:
    """Return the highest-ranked SKU, or None for an empty catalog."""
    matches = find_top_matches(rfp_product, oem_catalog, 1, synonyms)
    return matches[0] if matches else None
