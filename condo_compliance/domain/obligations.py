"""Obligation registry - catalog of recurring duties the engine tracks"""

from decimal import Decimal
from typing import List, Sequence

from condo_compliance.config import BillSettings, Settings
from condo_compliance.domain.exceptions import ConfigurationError
from condo_compliance.domain.models import (
    CONDO_WIDE,
    EXPENSE,
    INCOME,
    PER_UNIT,
    MatchRule,
    ObligationDefinition,
)

QUOTA_CATEGORY = "Taxa Condominial"
FUND_CATEGORY = "Fundo de Investimento"

QUOTA_GROUP = "quota"
FUND_GROUP = "fund"
BILLS_GROUP = "bills"

KEYWORD_FIELDS = {"description", "category"}
DESCRIPTION_ONLY = ("description",)

GROUP_LABELS = {
    QUOTA_GROUP: "Monthly Quota",
    FUND_GROUP: "Investment Fund",
    BILLS_GROUP: "Fixed Bills",
}

FUND_RULE = MatchRule(category=FUND_CATEGORY, keywords=("fundo",), keyword_fields=DESCRIPTION_ONLY)


def quota_obligation(due_day: int) -> ObligationDefinition:
    return ObligationDefinition(
        id="quota",
        label="Cota Mensal",
        group=QUOTA_GROUP,
        applies_to=PER_UNIT,
        direction=INCOME,
        due_day=due_day,
        match_rule=MatchRule(
            category=QUOTA_CATEGORY, keywords=("cota",), requires_unit=True, keyword_fields=DESCRIPTION_ONLY
        ),
    )


def fund_obligation(due_day: int, amount: Decimal | None = None) -> ObligationDefinition:
    return ObligationDefinition(
        id="fund",
        label="Fundo de Investimento",
        group=FUND_GROUP,
        applies_to=PER_UNIT,
        direction=INCOME,
        due_day=due_day,
        match_rule=MatchRule(
            category=FUND_CATEGORY, keywords=("fundo",), requires_unit=True, keyword_fields=DESCRIPTION_ONLY
        ),
        expected_amount=amount,
    )


def bill_obligation(bill: BillSettings) -> ObligationDefinition:
    return ObligationDefinition(
        id=bill.id,
        label=bill.label,
        group=BILLS_GROUP,
        applies_to=CONDO_WIDE,
        direction=EXPENSE,
        due_day=bill.due_day,
        match_rule=MatchRule(keywords=tuple(bill.keywords)),
    )


def validate_registry(registry: Sequence[ObligationDefinition]) -> None:
    """
    Reject registries the engine cannot evaluate meaningfully.

    Raises:
        ConfigurationError: On duplicate ids, out-of-range due days,
            unknown scope/direction or a rule that can never match
    """
    seen = set()
    for definition in registry:
        if definition.id in seen:
            raise ConfigurationError(f"Duplicate obligation id: {definition.id!r}")
        seen.add(definition.id)

        if not 1 <= definition.due_day <= 31:
            raise ConfigurationError(
                f"Obligation {definition.id!r} has due day {definition.due_day} outside 1-31"
            )
        if definition.applies_to not in (PER_UNIT, CONDO_WIDE):
            raise ConfigurationError(f"Obligation {definition.id!r} has unknown scope {definition.applies_to!r}")
        if definition.direction not in (INCOME, EXPENSE):
            raise ConfigurationError(
                f"Obligation {definition.id!r} has unknown direction {definition.direction!r}"
            )

        rule = definition.match_rule
        if rule.category is None and not any(k.strip() for k in rule.keywords):
            raise ConfigurationError(f"Obligation {definition.id!r} has no category or keywords to match on")
        if rule.keywords and not set(rule.keyword_fields) <= KEYWORD_FIELDS:
            raise ConfigurationError(
                f"Obligation {definition.id!r} matches keywords on unknown fields {rule.keyword_fields!r}"
            )
        if rule.keywords and not rule.keyword_fields:
            raise ConfigurationError(f"Obligation {definition.id!r} has keywords but no fields to search")
        if rule.requires_unit != definition.per_unit:
            raise ConfigurationError(
                f"Obligation {definition.id!r} unit requirement does not match its scope"
            )


def build_registry(config: Settings) -> List[ObligationDefinition]:
    """Build and validate the obligation registry from application settings"""
    registry = [
        quota_obligation(config.quota_due_day),
        fund_obligation(config.fund_due_day, config.fund_amount_fixed),
    ]
    registry.extend(bill_obligation(bill) for bill in config.bills)

    validate_registry(registry)
    return registry
