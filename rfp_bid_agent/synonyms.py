"""
Synonym Resolver

Curated table of interchangeable spec terms. Each synonym class maps a
canonical id to the set of normalized variants that mean the same thing.
Membership is a plain lookup; there is no similarity scoring.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Union

import yaml

from rfp_bid_agent.normalizer import normalize

SynonymTable = Mapping[str, FrozenSet[str]]

DEFAULT_SYNONYMS: Dict[str, list] = {
    "xlpe": ["cross-linked polyethylene", "xlpe", "cross linked polyethylene"],
    "pvc": ["polyvinyl chloride", "pvc"],
    "lszh": ["low smoke zero halogen", "lszh", "ls0h"],
    "aluminum": ["aluminium", "aluminum", "al"],
    "copper": ["copper", "cu"],
    "onan": ["oil natural air natural", "onan"],
}


def build_synonym_table(classes: Mapping[str, Iterable[str]]) -> SynonymTable:
    """
    Freeze a plain ``{class_id: [variant, ...]}`` dict into a synonym table.
    
    Variants are normalized so lookups can be done on normalized values.
    """
    return MappingProxyType({
        normalize(class_id): frozenset(normalize(str(variant)) for variant in variants)
        for class_id, variants in classes.items()
    })


SYNONYM_CLASSES: SynonymTable = build_synonym_table(DEFAULT_SYNONYMS)


def same_class(a: str, b: str, table: Optional[SynonymTable] = None) -> bool:
    """Return True if any single synonym class contains both terms."""
    if table is None:
        table = SYNONYM_CLASSES
    a_norm = normalize(a)
    b_norm = normalize(b)
    return any(a_norm in variants and b_norm in variants for variants in table.values())


def load_synonym_table(path: Union[str, Path], merge_defaults: bool = True) -> SynonymTable:
    """
    Load synonym classes from a YAML file.
    
    The file is a mapping of class id to a list of variants. Classes in the
    file replace built-in classes with the same id.
    
    Args:
        path: Path to the YAML file
        merge_defaults: Start from the built-in classes before applying the file
        
    Returns:
        Immutable synonym table
    """
    with open(path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    
    if not isinstance(loaded, dict):
        raise ValueError(f"Synonym file {path} must contain a mapping of class -> variants")
    
    classes: Dict[str, list] = dict(DEFAULT_SYNONYMS) if merge_defaults else {}
    for class_id, variants in loaded.items():
        if not isinstance(variants, list):
            raise ValueError(f"Synonym class '{class_id}' must be a list of variants")
        classes[normalize(str(class_id))] = variants
    
    return build_synonym_table(classes)
