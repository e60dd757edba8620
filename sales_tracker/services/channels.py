from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..errors import ValidationError
from ..records import (
    SALE_TYPE_INSTAGRAM,
    SALE_TYPE_PAID_TRAFFIC,
    SALE_TYPE_PERSONAL,
    SALE_TYPE_REFERRAL,
)


@dataclass(frozen=True)
class ChannelRule:
    commission_applicable: bool
    ad_cost_applicable: bool


# ---------- Rules per sale channel ----------
# Channel names are the keys; a custom rules mapping may add channels.
CHANNEL_RULES: Mapping[str, ChannelRule] = {
    SALE_TYPE_INSTAGRAM:    ChannelRule(commission_applicable=False, ad_cost_applicable=False),
    SALE_TYPE_REFERRAL:     ChannelRule(commission_applicable=True,  ad_cost_applicable=False),
    SALE_TYPE_PAID_TRAFFIC: ChannelRule(commission_applicable=False, ad_cost_applicable=True),
    SALE_TYPE_PERSONAL:     ChannelRule(commission_applicable=False, ad_cost_applicable=False),
}

# ---------- Human labels (UI copy) ----------
DESCRIPTIONS = {
    SALE_TYPE_INSTAGRAM:    "Sold through social media; no commission.",
    SALE_TYPE_REFERRAL:     "Referred by a partner who earns a commission.",
    SALE_TYPE_PAID_TRAFFIC: "Came from paid ads; the ad cost is deducted.",
    SALE_TYPE_PERSONAL:     "Direct sale; no commission, no ads.",
}


# ---------- API ----------

def normalize(
    sale_type: Optional[str], rules: Mapping[str, ChannelRule] = CHANNEL_RULES
) -> Optional[str]:
    """Strip and match case-insensitively against the channels in rules."""
    if sale_type is None:
        return None
    s = str(sale_type).strip().lower()
    for known in rules:
        if known.lower() == s:
            return known
    return None


def ensure_valid(sale_type: str, rules: Mapping[str, ChannelRule] = CHANNEL_RULES) -> str:
    """Return the canonical channel name; raise ValidationError if unknown."""
    s = normalize(sale_type, rules)
    if s is None:
        raise ValidationError(f"Sale type must be one of: {', '.join(rules)}.")
    return s


def rule_for(sale_type: str, rules: Mapping[str, ChannelRule] = CHANNEL_RULES) -> ChannelRule:
    return rules[ensure_valid(sale_type, rules)]


def effective_commission_rate(
    sale_type: str, rate: float, rules: Mapping[str, ChannelRule] = CHANNEL_RULES
) -> float:
    """The entered rate, or 0.0 where the channel pays no commission."""
    return float(rate) if rule_for(sale_type, rules).commission_applicable else 0.0


def effective_ad_cost(
    sale_type: str, ad_cost: float, rules: Mapping[str, ChannelRule] = CHANNEL_RULES
) -> float:
    """The entered ad cost, or 0.0 where the channel has no ad spend."""
    return float(ad_cost) if rule_for(sale_type, rules).ad_cost_applicable else 0.0
