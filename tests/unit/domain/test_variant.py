"""Unit tests for the variant dimension and `VariantPair`."""

import pytest

from bldt.domain import VARIANTS, Variant, VariantPair


class TestVariant:
    """Tests for the `Variant` enum."""

    @staticmethod
    def test_slots_follow_declaration_order() -> None:
        """SINGLE is slot 0 and DOUBLE slot 1, and VARIANTS lists them in that order."""
        assert Variant.SINGLE.slot == 0
        assert Variant.DOUBLE.slot == 1
        assert VARIANTS == (Variant.SINGLE, Variant.DOUBLE)

    @staticmethod
    @pytest.mark.parametrize("variant", list(Variant))
    def test_slot_round_trip(variant: Variant) -> None:
        """from_slot inverts slot."""
        assert Variant.from_slot(variant.slot) is variant

    @staticmethod
    def test_dp_mode_mapping() -> None:
        """The on-disk dpMode flag maps to DOUBLE when true."""
        assert Variant.from_dp_mode(True) is Variant.DOUBLE
        assert Variant.from_dp_mode(False) is Variant.SINGLE
        assert Variant.DOUBLE.dp_mode is True
        assert Variant.SINGLE.dp_mode is False

    @staticmethod
    def test_names() -> None:
        """str() gives the member name; short_name the lowercase token."""
        assert str(Variant.SINGLE) == "SINGLE"
        assert Variant.DOUBLE.short_name == "dp"


class TestVariantPair:
    """Tests for `VariantPair`."""

    @staticmethod
    def test_indexing_and_iteration() -> None:
        """Values are reachable by variant, in slot order."""
        pair = VariantPair("s", "d")
        assert pair[Variant.SINGLE] == "s"
        assert pair[Variant.DOUBLE] == "d"
        assert list(pair) == ["s", "d"]
        assert list(pair.items()) == [(Variant.SINGLE, "s"), (Variant.DOUBLE, "d")]

    @staticmethod
    def test_replace_returns_new_pair() -> None:
        """replace() leaves the original untouched."""
        pair = VariantPair(1, 2)
        assert pair.replace(Variant.DOUBLE, 3) == VariantPair(1, 3)
        assert pair.replace(Variant.SINGLE, 0) == VariantPair(0, 2)
        assert pair == VariantPair(1, 2)

    @staticmethod
    def test_of_fills_missing_slots() -> None:
        """of() uses the default for variants absent from the mapping."""
        assert VariantPair.of({Variant.DOUBLE: "d"}, "-") == VariantPair("-", "d")
