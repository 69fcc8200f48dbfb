"""Projection input models.

A ParameterSet bundles everything one projection needs: acquisition,
rental operations, financing, tax and horizon settings. Models are frozen
and type-checked only; value ranges are a caller concern (see
``rendite.application.services.validation``).

Field names are snake_case in Python and camelCase on the wire, so share
links and JSON exports stay compatible with the browser calculator.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from rendite.core.exceptions import InvalidParameterError
from rendite.core.financial import (
    calculate_ancillary_costs,
    calculate_total_costs,
    round_half_up,
)

_SECTION_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class Acquisition(BaseModel):
    """Purchase price, side costs and land share."""

    model_config = _SECTION_CONFIG

    price_property: float = Field(default=0.0, description="Purchase price of the property")
    price_furniture: float = Field(default=0.0, description="Purchase price of furniture")
    gr_est_pct: float = Field(default=3.5, alias="grEStPct", description="Real estate transfer tax %")
    notary_pct: float = Field(default=1.0, description="Notary fees %")
    land_reg_pct: float = Field(default=0.5, description="Land registry fees %")
    other_costs: float = Field(default=0.0, description="Other one-time costs")
    other_costs_annual: float = Field(default=0.0, description="Other recurring annual costs")
    land_share_pct: float = Field(default=34.0, description="Non-depreciable land share %")

    @property
    def ancillary_costs(self) -> float:
        return calculate_ancillary_costs(
            self.price_property,
            self.gr_est_pct,
            self.notary_pct,
            self.land_reg_pct,
            self.other_costs,
        )

    @property
    def total_costs(self) -> float:
        return calculate_total_costs(self.price_property, self.price_furniture, self.ancillary_costs)


class RentOps(BaseModel):
    """Rental income and operating cost assumptions."""

    model_config = _SECTION_CONFIG

    cold_rent_monthly: float = Field(default=0.0, description="Monthly cold rent")
    vacancy_pct: float = Field(default=3.0, description="Vacancy rate %")
    owner_costs_monthly: float = Field(default=0.0, description="Non-recoverable owner costs per month")
    mgmt_monthly: float = Field(default=75.0, description="Property management per month")
    capex_monthly: float = Field(default=50.0, description="Maintenance reserve per month")
    rent_growth_pct: float = Field(default=1.5, description="Annual rent growth %")
    value_growth_pct: float = Field(default=1.5, description="Annual market value growth %")


class Financing(BaseModel):
    """Equity and fixed-rate annuity loan terms."""

    model_config = _SECTION_CONFIG

    equity_amount: float = Field(default=0.0, description="Equity invested")
    equity_mode: Literal["amount", "percent"] = Field(
        default="amount", description="How the caller enters equity"
    )
    equity_percent: float = Field(default=10.0, description="Equity as % of total cost (percent mode)")
    interest_pct: float = Field(default=0.0, description="Nominal annual interest %")
    initial_redemption_pct: float = Field(default=0.0, description="Initial annual redemption %")
    term_years: int = Field(default=10, description="Fixed-rate period, informational")


class Tax(BaseModel):
    """Income tax assumptions."""

    model_config = _SECTION_CONFIG

    marginal_rate_pct: float = Field(default=42.0, description="Marginal income tax rate %")
    depreciation_pct: float = Field(default=4.0, description="Annual building depreciation (AfA) %")


class Settings(BaseModel):
    """Projection settings."""

    model_config = _SECTION_CONFIG

    horizon_years: int = Field(default=10, description="Number of projected years")


SECTIONS: tuple[str, ...] = ("acquisition", "rent_ops", "financing", "tax", "settings")


class ParameterSet(BaseModel):
    """Complete, immutable input of one projection."""

    model_config = _SECTION_CONFIG

    acquisition: Acquisition = Field(default_factory=Acquisition)
    rent_ops: RentOps = Field(default_factory=RentOps)
    financing: Financing = Field(default_factory=Financing)
    tax: Tax = Field(default_factory=Tax)
    settings: Settings = Field(default_factory=Settings)

    def updated(self, section: str, **changes: Any) -> ParameterSet:
        """Return a copy with fields of one section replaced.

        Args:
            section: Section attribute name (e.g. ``"financing"``)
            **changes: Field values by Python field name

        Returns:
            New ParameterSet, self is left untouched
        """
        if section not in SECTIONS:
            raise InvalidParameterError("section", section, f"expected one of {', '.join(SECTIONS)}")

        current: BaseModel = getattr(self, section)
        unknown = set(changes) - set(type(current).model_fields)
        if unknown:
            raise InvalidParameterError(section, sorted(unknown), "unknown field(s)")

        merged = {**current.model_dump(), **changes}
        try:
            new_section = type(current).model_validate(merged)
        except ValidationError as e:
            raise InvalidParameterError(section, changes, str(e)) from e
        return self.model_copy(update={section: new_section})

    def to_payload(self) -> dict[str, Any]:
        """Serialize with camelCase keys, as used on the wire."""
        return self.model_dump(by_alias=True)

    @classmethod
    def merged_onto_defaults(cls, payload: dict[str, Any] | None) -> ParameterSet:
        """Build a ParameterSet from partial external input.

        Starts from :func:`zero_state` and overlays only known fields that
        are present in the payload. Unknown sections and keys are dropped.
        Keys may use either the camelCase wire name or the Python name.

        Raises:
            InvalidParameterError: If the payload is not a mapping or a
                present field has the wrong type.
        """
        if payload is None:
            return zero_state()
        if not isinstance(payload, dict):
            raise InvalidParameterError("inputs", type(payload).__name__, "expected an object")

        merged = zero_state().model_dump()
        for section in SECTIONS:
            model_cls = cls.model_fields[section].annotation
            incoming = payload.get(section, payload.get(to_camel(section)))
            if incoming is None:
                continue
            if not isinstance(incoming, dict):
                raise InvalidParameterError(section, incoming, "expected an object")

            for name, field in model_cls.model_fields.items():
                alias = field.alias or name
                if alias in incoming:
                    merged[section][name] = incoming[alias]
                elif name in incoming:
                    merged[section][name] = incoming[name]

        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            raise InvalidParameterError("inputs", payload, str(e)) from e


def zero_state() -> ParameterSet:
    """Baseline with every amount at 0 and rates at their usual defaults."""
    return ParameterSet(
        acquisition=Acquisition(
            price_property=0.0,
            price_furniture=0.0,
            gr_est_pct=3.5,
            notary_pct=1.0,
            land_reg_pct=0.5,
            other_costs=0.0,
            other_costs_annual=0.0,
            land_share_pct=34.0,
        ),
        rent_ops=RentOps(
            cold_rent_monthly=0.0,
            vacancy_pct=3.0,
            owner_costs_monthly=0.0,
            mgmt_monthly=75.0,
            capex_monthly=50.0,
            rent_growth_pct=1.5,
            value_growth_pct=1.5,
        ),
        financing=Financing(
            equity_amount=0.0,
            equity_mode="amount",
            equity_percent=10.0,
            interest_pct=0.0,
            initial_redemption_pct=0.0,
            term_years=10,
        ),
        tax=Tax(marginal_rate_pct=42.0, depreciation_pct=4.0),
        settings=Settings(horizon_years=10),
    )


def demo_data() -> ParameterSet:
    """Illustrative scenario: 300k property, 1,200/month rent, 10% equity."""
    base = zero_state()
    acquisition = base.acquisition.model_copy(update={"price_property": 300_000.0})
    equity_amount = round_half_up(acquisition.total_costs * 0.10)

    return base.model_copy(
        update={
            "acquisition": acquisition,
            "rent_ops": base.rent_ops.model_copy(update={"cold_rent_monthly": 1200.0}),
            "financing": base.financing.model_copy(
                update={
                    "equity_amount": equity_amount,
                    "interest_pct": 4.0,
                    "initial_redemption_pct": 2.0,
                }
            ),
        }
    )
