"""Unit tests for `VariantProfile` and `TableConfiguration`."""

import pytest

from bldt.adapters.formats import ScoreJsonAdapter
from bldt.domain import NOT_FOUND, TableConfiguration, Variant, VariantProfile
from bldt.errors import InvalidDefinitionError

URL = "https://tables.test/x.json"


class TestVariantProfile:
    """Tests for `VariantProfile`."""

    @staticmethod
    def test_label_lookup() -> None:
        """Labels resolve to their index; unknown labels to NOT_FOUND."""
        profile = VariantProfile("★", URL, ["1", "2", "???"])
        assert profile.rank_of("???") == 2
        assert profile.rank_of("4") == NOT_FOUND
        assert profile.label_of(1) == "2"
        assert profile.labels == ("1", "2", "???")

    @staticmethod
    def test_rank_bounds() -> None:
        """The last index is valid; the label count is not."""
        profile = VariantProfile("★", URL, ["1", "2", "3"])
        assert profile.is_valid_rank(0)
        assert profile.is_valid_rank(2)
        assert not profile.is_valid_rank(3)
        assert not profile.is_valid_rank(-1)

    @staticmethod
    @pytest.mark.parametrize(
        ("symbol", "url", "labels"),
        [
            ("", URL, ["1"]),
            ("★", "", ["1"]),
            ("★", URL, []),
            ("★", URL, ["1", ""]),
            ("★", URL, ["1", "1"]),
        ],
        ids=["empty-symbol", "empty-url", "no-labels", "empty-label", "duplicate"],
    )
    def test_invalid_definitions(symbol, url, labels) -> None:
        """Malformed profiles are rejected at construction."""
        with pytest.raises(InvalidDefinitionError):
            VariantProfile(symbol, url, labels)


class TestTableConfiguration:
    """Tests for `TableConfiguration`."""

    @staticmethod
    def _profile() -> VariantProfile:
        return VariantProfile("★", URL, ["1"])

    def test_supported_variants(self) -> None:
        """Only populated slots are supported, in slot order."""
        table = TableConfiguration(
            "dp_only",
            "DP only",
            "https://x.test/",
            ScoreJsonAdapter(),
            None,
            self._profile(),
        )
        assert table.supported_variants() == [Variant.DOUBLE]
        assert table.supports(Variant.DOUBLE)
        assert not table.supports(Variant.SINGLE)
        assert table.profile(Variant.SINGLE) is None
        assert table.double is table.profile(Variant.DOUBLE)
        assert table.preset is False

    def test_display_name_can_be_replaced(self) -> None:
        """The display name is mutable but never empty."""
        table = TableConfiguration(
            "t", "Name", "https://x.test/", ScoreJsonAdapter(), self._profile()
        )
        table.name = "名前"
        assert table.name == "名前"
        with pytest.raises(InvalidDefinitionError):
            table.name = ""

    @pytest.mark.parametrize(
        ("table_id", "home_url", "with_profile"),
        [
            ("bad-id", "https://x.test/", True),
            ("t", "", True),
            ("t", "https://x.test/", False),
        ],
        ids=["bad-identifier", "empty-home-url", "no-variants"],
    )
    def test_invalid_definitions(self, table_id, home_url, with_profile) -> None:
        """Bad identifiers, empty home URLs and profile-less tables are rejected."""
        profile = self._profile() if with_profile else None
        with pytest.raises(InvalidDefinitionError):
            TableConfiguration(table_id, "Name", home_url, ScoreJsonAdapter(), profile)
