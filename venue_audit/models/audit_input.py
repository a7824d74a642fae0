"""
Audit input snapshot — one small sub-record per module.

``AuditInput`` is the only argument to ``run_quiet_audit()``.  It composes
seven module sub-records (``FoodInput``, ``LabourInput`` ...) so each scorer's
dependency surface is explicit.  Every metric field is ``Optional`` and
defaults to ``None``: the value substituted for a missing metric is a named
constant in the owning scorer module (e.g. ``scoring.food.DEFAULT_WASTE_PCT``),
not part of the data model.

The surrounding application stores snapshots as one flat camelCase record
(``{"actualFoodCostPct": 31.2, "rentPct": 13, ...}``).
``AuditInput.from_flat()`` routes each key of such a record to its
sub-record; unknown keys are ignored and logged.

Validation of malformed values (e.g. a non-numeric string) happens here, at
the boundary, via pydantic. The scoring engine itself never raises.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from venue_audit.taxonomy.audit_taxonomy import AuditSource, ModuleKey, VenueType

logger = logging.getLogger(__name__)


class FoodInput(BaseModel):
    """Kitchen cost and menu metrics."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    actual_food_cost_pct: Optional[float] = None
    theoretical_food_cost_pct: Optional[float] = None
    waste_pct: Optional[float] = None
    menu_stars_pct: Optional[float] = None
    menu_plowhorse_pct: Optional[float] = None
    menu_dogs_count: Optional[int] = None
    menu_puzzles_count: Optional[int] = None
    supplier_count: Optional[int] = None
    supplier_price_compare: Optional[bool] = None
    use_prep_lists: Optional[bool] = None
    prep_completion_rate: Optional[float] = None
    monthly_food_revenue: Optional[float] = None
    monthly_food_purchases: Optional[float] = None


class BeverageInput(BaseModel):
    """Bar cost, stock and list metrics."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    actual_bev_cost_pct: Optional[float] = None
    dead_stock_pct: Optional[float] = None
    stocktake_variance_pct: Optional[float] = None
    list_review_days: Optional[int] = None
    coravin_yield_pct: Optional[float] = None
    use_coravin: Optional[bool] = None
    bev_revenue_mix_pct: Optional[float] = None


class LabourInput(BaseModel):
    """Wage cost, rostering and award-compliance metrics."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    labour_cost_pct: Optional[float] = None
    overtime_hours_weekly: Optional[float] = None
    overtime_budget_hours: Optional[float] = None
    award_compliant: Optional[bool] = None
    casual_loading_applied: Optional[bool] = None
    casual_conversion_offered: Optional[bool] = None
    super_rate: Optional[float] = None
    pays_super_on_time: Optional[bool] = None
    staff_count: Optional[int] = None
    casual_count: Optional[int] = None
    covers_per_day: Optional[float] = None
    fatigue_compliant: Optional[bool] = None
    break_compliant: Optional[bool] = None
    monthly_labour_cost: Optional[float] = None


class OverheadInput(BaseModel):
    """P&L-level cost structure metrics."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    total_overhead_pct: Optional[float] = None
    rent_pct: Optional[float] = None
    prime_cost_pct: Optional[float] = None
    net_profit_pct: Optional[float] = None
    break_even_day_of_month: Optional[int] = None
    prev_break_even_day: Optional[int] = None
    pnl_data_complete_pct: Optional[float] = None
    monthly_revenue: Optional[float] = None
    monthly_rent: Optional[float] = None


class ServiceInput(BaseModel):
    """Floor and point-of-sale control metrics.

    ``monthly_revenue`` is not a field here: Service savings are sized off
    ``OverheadInput.monthly_revenue``, the single revenue figure of the
    snapshot.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    void_rate_pct: Optional[float] = None
    avg_service_minutes: Optional[float] = None
    payment_efficiency_score: Optional[float] = None
    discount_pct: Optional[float] = None
    cash_variance_pct: Optional[float] = None


class MarketingInput(BaseModel):
    """Campaign and guest-retention metrics."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    campaigns_per_month: Optional[int] = None
    email_open_rate: Optional[float] = None
    roas: Optional[float] = None
    quiet_nights_targeted: Optional[bool] = None
    repeat_customer_pct: Optional[float] = None
    database_size: Optional[int] = None
    monthly_marketing_spend: Optional[float] = None


class ComplianceInput(BaseModel):
    """Licences, certificates and employment-law flags.

    ``award_compliant``, ``super_rate`` and ``break_compliant`` are read from
    ``LabourInput``: the same fact drives both the Labour and Compliance
    scores and must not be entered twice.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    liquor_license_current: Optional[bool] = None
    food_safety_cert_current: Optional[bool] = None
    rsa_current: Optional[bool] = None
    workers_comp_current: Optional[bool] = None
    stp_phase2_compliant: Optional[bool] = None
    payslip_compliant: Optional[bool] = None
    right_to_disconnect_policy: Optional[bool] = None
    induction_records_complete: Optional[bool] = None
    record_retention_years: Optional[float] = None
    written_contracts: Optional[bool] = None


_SUB_RECORDS: dict[ModuleKey, type[BaseModel]] = {
    ModuleKey.FOOD:       FoodInput,
    ModuleKey.BEVERAGE:   BeverageInput,
    ModuleKey.LABOUR:     LabourInput,
    ModuleKey.OVERHEAD:   OverheadInput,
    ModuleKey.SERVICE:    ServiceInput,
    ModuleKey.MARKETING:  MarketingInput,
    ModuleKey.COMPLIANCE: ComplianceInput,
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    """Convert ``actualFoodCostPct`` to ``actual_food_cost_pct``.

    snake_case input passes through unchanged.
    """
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class AuditInput(BaseModel):
    """One venue snapshot, composed of per-module sub-records.

    Attributes:
        venue_type: Venue format string.  Kept as ``str`` rather than
            ``VenueType`` so unknown values pass validation; the benchmark
            registry resolves them to ``casual_dining``.
        source: ``INTERNAL`` (pulled from venue systems) or ``EXTERNAL``
            (questionnaire).  Drives data-source tags and confidence.
        prev_scores: Optional module key → previous module score, used only
            for the cosmetic trend arrow.
        food ... compliance: Module sub-records; all fields optional.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    venue_type: str = VenueType.CASUAL_DINING.value
    source: AuditSource = AuditSource.EXTERNAL
    prev_scores: Optional[dict[str, int]] = None

    food: FoodInput = FoodInput()
    beverage: BeverageInput = BeverageInput()
    labour: LabourInput = LabourInput()
    overhead: OverheadInput = OverheadInput()
    service: ServiceInput = ServiceInput()
    marketing: MarketingInput = MarketingInput()
    compliance: ComplianceInput = ComplianceInput()

    @field_validator("venue_type", mode="before")
    @classmethod
    def normalise_venue_type(cls, v: Any) -> str:
        if v is None:
            return VenueType.CASUAL_DINING.value
        return str(v).strip().lower()

    def prev_score(self, module: ModuleKey) -> Optional[int]:
        """Caller-supplied previous score for ``module``, or ``None``."""
        if not self.prev_scores:
            return None
        return self.prev_scores.get(module.value)

    @classmethod
    def from_flat(cls, record: dict[str, Any]) -> "AuditInput":
        """Build an ``AuditInput`` from a flat camelCase (or snake_case) record.

        Each metric key is routed to the sub-record that declares the
        matching field.  ``venueType``, ``source`` and ``prevScores`` are
        top-level.  Keys that match no field are skipped with a warning.

        Raises:
            pydantic.ValidationError: If a value cannot be coerced to its
                field type.
        """
        top: dict[str, Any] = {}
        parts: dict[ModuleKey, dict[str, Any]] = {key: {} for key in _SUB_RECORDS}
        unknown: list[str] = []

        for raw_key, value in record.items():
            key = camel_to_snake(raw_key)
            if key in ("venue_type", "source", "prev_scores"):
                top[key] = value
                continue
            for module, model_cls in _SUB_RECORDS.items():
                if key in model_cls.model_fields:
                    parts[module][key] = value
                    break
            else:
                unknown.append(raw_key)

        if unknown:
            logger.warning("Ignoring %d unknown input field(s): %s", len(unknown), sorted(unknown))

        return cls(
            **top,
            **{module.value: _SUB_RECORDS[module](**fields) for module, fields in parts.items()},
        )

    def to_flat(self) -> dict[str, Any]:
        """Inverse of ``from_flat()``: one flat snake_case dict of set fields."""
        flat: dict[str, Any] = {
            "venue_type": self.venue_type,
            "source": self.source.value,
        }
        if self.prev_scores:
            flat["prev_scores"] = dict(self.prev_scores)
        for module in _SUB_RECORDS:
            sub: BaseModel = getattr(self, module.value)
            flat.update(sub.model_dump(exclude_none=True))
        return flat
