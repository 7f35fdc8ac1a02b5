"""Static description of one table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bldt.errors import InvalidDefinitionError

from .validation import is_identifier
from .variant import Variant, VariantPair

if TYPE_CHECKING:
    from bldt.interfaces.format_adapter import FormatAdapter

    from .profile import VariantProfile


class TableConfiguration:
    """Identifier, display name, home URL, format adapter and variant profiles.

    At least one of the two variant slots must be populated. Everything but the
    display name is fixed after construction; the display name may be replaced
    (e.g. with a localized one) through the `name` setter.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        table_id: str,
        name: str,
        home_url: str,
        adapter: FormatAdapter,
        single: VariantProfile | None = None,
        double: VariantProfile | None = None,
        *,
        preset: bool = False,
    ) -> None:
        if not is_identifier(table_id):
            raise InvalidDefinitionError(
                "table configuration", f"'{table_id}' is not a valid identifier"
            )
        if not home_url:
            raise InvalidDefinitionError(
                "table configuration", "home URL is empty", key=table_id
            )
        if adapter is None:
            raise InvalidDefinitionError(
                "table configuration", "format adapter is missing", key=table_id
            )
        if single is None and double is None:
            raise InvalidDefinitionError(
                "table configuration", "all variants are disabled", key=table_id
            )
        self._id = table_id
        self._name = ""
        self.name = name
        self._home_url = home_url
        self._adapter = adapter
        self._profiles: VariantPair[VariantProfile | None] = VariantPair(single, double)
        self._preset = preset

    @property
    def id(self) -> str:  # pylint: disable=invalid-name
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if not value:
            raise InvalidDefinitionError(
                "table configuration", "name is empty", key=self._id
            )
        self._name = value

    @property
    def home_url(self) -> str:
        return self._home_url

    @property
    def adapter(self) -> FormatAdapter:
        return self._adapter

    @property
    def preset(self) -> bool:
        """True for the built-in configurations."""
        return self._preset

    @property
    def single(self) -> VariantProfile | None:
        return self._profiles.single

    @property
    def double(self) -> VariantProfile | None:
        return self._profiles.double

    def profile(self, variant: Variant) -> VariantProfile | None:
        """Return the profile for *variant*, or None if the table lacks it."""
        return self._profiles[variant]

    def supports(self, variant: Variant) -> bool:
        return self._profiles[variant] is not None

    def supported_variants(self) -> list[Variant]:
        """Variants with a profile, in slot order."""
        return [
            variant
            for variant, profile in self._profiles.items()
            if profile is not None
        ]

    def __repr__(self) -> str:
        return f"TableConfiguration(id={self._id!r}, name={self._name!r})"
