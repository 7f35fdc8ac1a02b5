"""Built-in table configurations."""

from __future__ import annotations

from dataclasses import dataclass

from bldt.adapters.formats import GenocideHtmlAdapter, ScoreJsonAdapter
from bldt.domain import TableConfiguration, VariantProfile
from bldt.interfaces import FormatAdapter

from .table_registry import TableRegistry


@dataclass(frozen=True, slots=True)
class VariantPreset:
    """Static data of one variant of a preset."""

    symbol: str
    source_url: str
    labels: tuple[str, ...]

    def build(self) -> VariantProfile:
        return VariantProfile(self.symbol, self.source_url, self.labels)


@dataclass(frozen=True, slots=True)
class TablePreset:
    """Static data of one built-in table."""

    table_id: str
    name: str
    home_url: str
    adapter: type[FormatAdapter]
    single: VariantPreset | None = None
    double: VariantPreset | None = None

    def build(self) -> TableConfiguration:
        return TableConfiguration(
            self.table_id,
            self.name,
            self.home_url,
            self.adapter(),
            self.single.build() if self.single else None,
            self.double.build() if self.double else None,
            preset=True,
        )


def _numbers(first: int, last: int) -> tuple[str, ...]:
    return tuple(str(n) for n in range(first, last + 1))


PRESETS: tuple[TablePreset, ...] = (
    TablePreset(
        "genocide_n",
        "GENOCIDE Normal",
        "https://nekokan.dyndns.info/~lobsak/genocide/",
        GenocideHtmlAdapter,
        single=VariantPreset(
            "☆",
            "https://nekokan.dyndns.info/~lobsak/genocide/normal.html",
            (*_numbers(1, 13), "X"),
        ),
    ),
    TablePreset(
        "genocide_i",
        "GENOCIDE Insane",
        "https://nekokan.dyndns.info/~lobsak/genocide/",
        GenocideHtmlAdapter,
        single=VariantPreset(
            "★",
            "https://nekokan.dyndns.info/~lobsak/genocide/insane.html",
            (*_numbers(1, 25), "???"),
        ),
    ),
    TablePreset(
        "delta_n",
        "DP delta",
        "https://deltabms.yaruki0.net/",
        ScoreJsonAdapter,
        double=VariantPreset(
            "δ",
            "https://deltabms.yaruki0.net/table/data/dpdelta_data.json",
            (*_numbers(1, 11), "97", "98", "99"),
        ),
    ),
    TablePreset(
        "delta_i",
        "DP Insane",
        "https://deltabms.yaruki0.net/",
        ScoreJsonAdapter,
        double=VariantPreset(
            "★",
            "https://deltabms.yaruki0.net/table/data/insane_data.json",
            (*_numbers(1, 13), "?"),
        ),
    ),
    TablePreset(
        "newgen_n",
        "New Generation Normal",
        "https://rattoto10.jounin.jp/",
        ScoreJsonAdapter,
        single=VariantPreset(
            "▽",
            "https://rattoto10.github.io/second_table/score.json",
            (*_numbers(1, 11), "11+", "12-", "12", "12+", "？"),
        ),
    ),
    TablePreset(
        "newgen_i",
        "New Generation Insane",
        "https://rattoto10.jounin.jp/",
        ScoreJsonAdapter,
        single=VariantPreset(
            "▼",
            "https://rattoto10.github.io/second_table/insane_data.json",
            ("0-", *_numbers(0, 24), "?"),
        ),
    ),
    TablePreset(
        "satellite",
        "Satellite",
        "https://stellabms.xyz/",
        ScoreJsonAdapter,
        single=VariantPreset(
            "sl", "https://stellabms.xyz/sl/score.json", _numbers(0, 12)
        ),
        double=VariantPreset(
            "DPsl", "https://stellabms.xyz/dp/score.json", _numbers(0, 10)
        ),
    ),
    TablePreset(
        "stella",
        "Stella",
        "https://stellabms.xyz/",
        ScoreJsonAdapter,
        single=VariantPreset(
            "st", "https://stellabms.xyz/st/score.json", _numbers(0, 12)
        ),
        double=VariantPreset(
            "DPst", "https://stellabms.xyz/dpst/score.json", _numbers(0, 10)
        ),
    ),
    TablePreset(
        "solar",
        "Solar",
        "https://stellabms.xyz/",
        ScoreJsonAdapter,
        single=VariantPreset(
            "so", "https://stellabms.xyz/so/score.json", _numbers(0, 12)
        ),
    ),
    TablePreset(
        "supernova",
        "Supernova",
        "https://stellabms.xyz/",
        ScoreJsonAdapter,
        single=VariantPreset(
            "sn", "https://stellabms.xyz/sn/score.json", _numbers(0, 12)
        ),
    ),
    TablePreset(
        "overjoy",
        "Overjoy",
        "https://rattoto10.jounin.jp/",
        ScoreJsonAdapter,
        single=VariantPreset(
            "★★",
            "https://rattoto10.github.io/second_table/overjoy_score.json",
            _numbers(0, 8),
        ),
        double=VariantPreset(
            "★★",
            "http://ereter.net/static/analyzer/json/overjoy.json",
            (*_numbers(1, 12), "99"),
        ),
    ),
    TablePreset(
        "long_note",
        "LN",
        "http://flowermaster.web.fc2.com/lrnanido/bmsln.html",
        ScoreJsonAdapter,
        single=VariantPreset(
            "◆",
            "http://flowermaster.web.fc2.com/lrnanido/gla/score.json",
            _numbers(1, 26),
        ),
    ),
    TablePreset(
        "scramble",
        "Scramble",
        "https://egret9.github.io/Scramble/",
        ScoreJsonAdapter,
        single=VariantPreset(
            "SB",
            "https://script.google.com/macros/s/AKfycbw5pnMwlCFZz7wDY5kRsBpfSm0-luKszs8LQAEE6BKkVT1R78-CpB4WA9chW-gdBsF7IA/exec",  # pylint: disable=line-too-long
            ("-1", *_numbers(0, 12)),
        ),
    ),
    TablePreset(
        "unique",
        "Unique",
        "https://rattoto10.web.fc2.com/kuse_library/main.html",
        ScoreJsonAdapter,
        single=VariantPreset(
            "癖",
            "https://rattoto10.web.fc2.com/kuse_library/score.json",
            (*_numbers(0, 31), *_numbers(51, 56), "99"),
        ),
    ),
)


def default_registry() -> TableRegistry:
    """Return a new registry seeded with every preset, in preset order."""
    return TableRegistry(preset.build() for preset in PRESETS)
