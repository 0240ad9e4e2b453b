"""
Role inference for participants.

Not every historical match carries a position label, so the role is decided by
an ordered list of rules: the first rule that returns a role wins.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .reference import SMITE_SPELL_ID, SUPPORT_CS_THRESHOLD, SUPPORT_ITEM_IDS
from .schemas import Role

Participant = Dict[str, Any]

# Position labels and their synonyms
ROLE_SYNONYMS: Dict[str, Role] = {
    "TOP": Role.TOP,
    "JUNGLE": Role.JUNGLE,
    "MIDDLE": Role.MIDDLE,
    "MID": Role.MIDDLE,
    "BOTTOM": Role.BOTTOM,
    "BOT": Role.BOTTOM,
    "ADC": Role.BOTTOM,
    "UTILITY": Role.SUPPORT,
    "SUPPORT": Role.SUPPORT,
}

DEFAULT_ROLE = Role.MIDDLE


def as_int(value: Any) -> int:
    """Coerce an optional numeric field to int, 0 when missing or malformed."""
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def total_cs(participant: Participant) -> int:
    """Lane plus jungle minion kills."""
    return as_int(participant.get("totalMinionsKilled")) + as_int(
        participant.get("neutralMinionsKilled")
    )


def item_slots(participant: Participant) -> List[int]:
    """The six equipment slots (trinket excluded), zeros included."""
    return [as_int(participant.get(f"item{slot}")) for slot in range(6)]


def role_from_label(participant: Participant) -> Optional[Role]:
    """Use the upstream position label when it is one we recognize."""
    label = participant.get("teamPosition") or participant.get("individualPosition")
    if not label:
        return None
    return ROLE_SYNONYMS.get(str(label).upper())


def role_from_smite(participant: Participant) -> Optional[Role]:
    """Smite in either spell slot marks the jungler."""
    spells = (
        as_int(participant.get("summoner1Id")),
        as_int(participant.get("summoner2Id")),
    )
    return Role.JUNGLE if SMITE_SPELL_ID in spells else None


def role_from_support_item(participant: Participant) -> Optional[Role]:
    """A support starter item in any equipment slot."""
    if any(item in SUPPORT_ITEM_IDS for item in item_slots(participant)):
        return Role.SUPPORT
    return None


def role_from_low_cs(participant: Participant) -> Optional[Role]:
    """Very low creep score usually means support."""
    return Role.SUPPORT if total_cs(participant) < SUPPORT_CS_THRESHOLD else None


@dataclass(frozen=True)
class RoleRule:
    """A named predicate that either decides a role or passes."""

    name: str
    decide: Callable[[Participant], Optional[Role]]


ROLE_RULES: List[RoleRule] = [
    RoleRule("position_label", role_from_label),
    RoleRule("smite", role_from_smite),
    RoleRule("support_item", role_from_support_item),
    RoleRule("low_cs", role_from_low_cs),
]


def infer_role(
    participant: Participant, rules: Optional[List[RoleRule]] = None
) -> Role:
    """Return the role chosen by the first matching rule, MIDDLE if none match."""
    for rule in ROLE_RULES if rules is None else rules:
        role = rule.decide(participant)
        if role is not None:
            return role
    return DEFAULT_ROLE
