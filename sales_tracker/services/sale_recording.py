from __future__ import annotations

"""
Sale recording workflow.

A sale is written in three steps that are NOT atomic across each other:

  1) create_sale            (authoritative; failure aborts everything)
  2) stock decrement by 1   (at most once per sale id; the effect marker is
                            written in the same gateway write as the quantity)
  3) delete converted lead  (only when a lead id is given; a lead that is
                            already gone counts as removed)

If step 2 or 3 fails the sale stays persisted and the caller gets a
RecordingResult listing what is still pending; SaleRecorder.complete()
re-runs only those steps. Nothing is retried automatically.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import List, Mapping, Optional, Sequence, Union

from ..constants import DEFAULT_COMMISSION_RATE
from ..database.gateway import EFFECT_LEAD_REMOVED, EFFECT_STOCK_DECREMENT, PersistenceGateway
from ..errors import DomainError, NotFoundError, ValidationError
from ..records import InventoryItem, Sale, SALE_STATUS_PENDING
from ..utils.validators import optional_non_negative, require_non_negative, require_text
from . import channels
from .aggregation import commission_value, net_profit, parse_date
from .channels import CHANNEL_RULES, ChannelRule
from .inventory_valuation import find_item

_log = logging.getLogger(__name__)

Number = Union[float, int, str]

STEP_STOCK = EFFECT_STOCK_DECREMENT
STEP_LEAD = EFFECT_LEAD_REMOVED


@dataclass
class SaleDraft:
    """Raw form input for a new sale. Values may still be text."""
    client_name: str
    product_name: str
    amount: Number
    sale_type: str
    discount: Optional[Number] = 0.0
    freight: Optional[Number] = 0.0
    ad_cost: Optional[Number] = 0.0
    commission_rate: Optional[Number] = DEFAULT_COMMISSION_RATE
    date: Optional[Union[date, str]] = None


@dataclass
class RecordingResult:
    sale: Sale
    pending_steps: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.pending_steps


def new_sale_id() -> str:
    return uuid.uuid4().hex


def build_sale(
    draft: SaleDraft,
    inventory: Sequence[InventoryItem],
    rules: Mapping[str, ChannelRule] = CHANNEL_RULES,
    *,
    sale_id: Optional[str] = None,
) -> Sale:
    """
    Validate a draft and turn it into a Sale ready to persist.

    Raises ValidationError for empty names, negative money, a rate outside
    0..100, an unknown sale type, a bad date, or a product that is not in
    the inventory. The product's cost_price is copied onto the sale.
    """
    client = require_text(draft.client_name, "Client name")
    product = require_text(draft.product_name, "Product")
    amount = require_non_negative(draft.amount, "Amount")
    discount = optional_non_negative(draft.discount, "Discount")
    freight = optional_non_negative(draft.freight, "Freight")
    ad_cost = optional_non_negative(draft.ad_cost, "Ad cost")
    rate = optional_non_negative(draft.commission_rate, "Commission rate")
    if rate > 100:
        raise ValidationError("Commission rate must be between 0 and 100.")
    sale_type = channels.ensure_valid(draft.sale_type, rules)
    sale_date = parse_date(draft.date) if draft.date not in (None, "") else date.today()

    item = find_item(inventory, product)
    if item is None:
        raise ValidationError(f"Product '{product}' is not in the inventory.")

    rate = channels.effective_commission_rate(sale_type, rate, rules)
    ad_cost = channels.effective_ad_cost(sale_type, ad_cost, rules)

    return Sale(
        id=sale_id or new_sale_id(),
        client_name=client,
        product_name=item.product_name,
        amount=amount,
        cost=item.cost_price,
        commission_rate=rate,
        commission_value=commission_value(amount, rate),
        date=sale_date,
        sale_type=sale_type,
        status=SALE_STATUS_PENDING,
        freight=freight,
        discount=discount,
        ad_cost=ad_cost,
    )


def preview_net_profit(
    draft: SaleDraft,
    inventory: Sequence[InventoryItem],
    rules: Mapping[str, ChannelRule] = CHANNEL_RULES,
) -> float:
    """
    Net profit the draft would produce, for the live label in the sale form.
    Unparseable or missing inputs count as 0; never raises.
    """
    def num(v) -> float:
        try:
            return max(float(v), 0.0)
        except (TypeError, ValueError):
            return 0.0

    item = find_item(inventory, (draft.product_name or "").strip())
    sale_type = channels.normalize(draft.sale_type, rules)
    rule = rules.get(sale_type) if sale_type else None

    amount = num(draft.amount)
    rate = num(draft.commission_rate) if rule and rule.commission_applicable else 0.0
    ad_cost = num(draft.ad_cost) if rule and rule.ad_cost_applicable else 0.0

    preview = Sale(
        id="",
        client_name="",
        product_name="",
        amount=amount,
        cost=item.cost_price if item else 0.0,
        commission_rate=rate,
        commission_value=commission_value(amount, min(rate, 100.0)),
        date=date.today(),
        sale_type=sale_type or "",
        freight=num(draft.freight),
        discount=num(draft.discount),
        ad_cost=ad_cost,
    )
    return net_profit(preview)


class SaleRecorder:
    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    def record(
        self,
        draft: SaleDraft,
        inventory: Sequence[InventoryItem],
        lead_id: Optional[str] = None,
        rules: Mapping[str, ChannelRule] = CHANNEL_RULES,
    ) -> RecordingResult:
        """
        Validate, persist and apply the side effects of a new sale.

        ValidationError is raised before any write. A StorageError from
        create_sale propagates unchanged; later failures are reported in
        the returned RecordingResult.
        """
        sale = build_sale(draft, inventory, rules)
        self.gateway.create_sale(sale)
        _log.info("Recorded sale %s (%s, %s)", sale.id, sale.client_name, sale.product_name)
        return self.complete(sale, lead_id)

    def complete(self, sale: Sale, lead_id: Optional[str] = None) -> RecordingResult:
        """Run (or re-run) the steps that have not been applied for this sale."""
        result = RecordingResult(sale=sale)

        self._run_step(result, STEP_STOCK, lambda: self._decrement_stock(sale))
        if lead_id:
            self._run_step(result, STEP_LEAD, lambda: self._remove_lead(sale.id, lead_id))

        if result.pending_steps:
            _log.warning(
                "Sale %s saved with pending steps: %s", sale.id, ", ".join(result.pending_steps)
            )
        return result

    def _run_step(self, result: RecordingResult, step: str, action) -> None:
        sale_id = result.sale.id
        try:
            action()
        except DomainError as e:
            _log.warning("Sale %s: %s failed: %s", sale_id, step, e)
            result.pending_steps.append(step)
            result.errors.append(str(e))

    def _decrement_stock(self, sale: Sale) -> None:
        # marker and quantity change are one write in the gateway
        if self.gateway.apply_stock_effect(sale.id, sale.product_name, -1):
            _log.debug("Sale %s: stock of %s decremented", sale.id, sale.product_name)
        else:
            _log.debug("Sale %s: stock already decremented", sale.id)

    def _remove_lead(self, sale_id: str, lead_id: str) -> None:
        if self.gateway.effect_applied(sale_id, STEP_LEAD):
            _log.debug("Sale %s: lead %s already removed", sale_id, lead_id)
            return
        try:
            self.gateway.delete_lead(lead_id)
        except NotFoundError:
            # someone already removed it
            _log.info("Lead %s was already gone", lead_id)
        self.gateway.mark_effect(sale_id, STEP_LEAD)
