import pytest

from rfp_bid_agent.synonyms import (
    SYNONYM_CLASSES,
    build_synonym_table,
    load_synonym_table,
    same_class,
)


class TestSameClass:

    @pytest.mark.parametrize("a, b", [
        ("xlpe", "cross-linked polyethylene"),
        ("cross linked polyethylene", "cross-linked polyethylene"),
        ("aluminium", "al"),
        ("lszh", "ls0h"),
        ("onan", "oil natural air natural"),
        ("cu", "copper"),
    ])
    def test_variants_of_one_class(self, a, b):
        assert same_class(a, b)
        assert same_class(b, a)

    def test_lookup_is_normalized(self):
        assert same_class("  XLPE ", "Cross-Linked  Polyethylene")

    def test_different_classes(self):
        assert not same_class("aluminum", "copper")

    def test_unknown_terms(self):
        assert not same_class("sf6", "air")

    def test_shared_variant_between_classes(self):
        table = build_synonym_table({"a": ["x", "shared"], "b": ["y", "shared"]})
        assert same_class("x", "shared", table)
        assert same_class("y", "shared", table)
        assert not same_class("x", "y", table)


class TestSynonymTable:

    def test_table_is_immutable(self):
        with pytest.raises(TypeError):
            SYNONYM_CLASSES["new"] = frozenset({"a"})
        assert isinstance(SYNONYM_CLASSES["xlpe"], frozenset)

    def test_build_normalizes_variants(self):
        table = build_synonym_table({"EPR": ["Ethylene  Propylene Rubber", "EPR"]})
        assert table["epr"] == frozenset({"ethylene propylene rubber", "epr"})

    def test_load_merges_over_defaults(self, tmp_path):
        path = tmp_path / "synonyms.yaml"
        path.write_text("epr:\n  - ethylene propylene rubber\n  - EPR\n", encoding="utf-8")

        table = load_synonym_table(path)

        assert same_class("epr", "ethylene propylene rubber", table)
        assert same_class("xlpe", "cross linked polyethylene", table)

    def test_load_without_defaults(self, tmp_path):
        path = tmp_path / "synonyms.yaml"
        path.write_text("epr: [epr, ethylene propylene rubber]\n", encoding="utf-8")

        table = load_synonym_table(path, merge_defaults=False)

        assert list(table) == ["epr"]
        assert not same_class("xlpe", "cross linked polyethylene", table)

    def test_load_rejects_non_list_class(self, tmp_path):
        path = tmp_path / "synonyms.yaml"
        path.write_text("epr: ethylene propylene rubber\n", encoding="utf-8")

        with pytest.raises(ValueError, match="epr"):
            load_synonym_table(path)
