"""
Quote area calculation

Pure pricing helpers plus QuoteBook, the collection of quotes built from
masks in a MaskStore.

Pricing:
    area_m2   = area_px / pixels_per_meter^2
    subtotal  = (material_cost + labor_cost) * area_m2 * (1 + markup / 100)
    tax       = sum(subtotals) * tax_rate / 100
    total     = sum(subtotals) + tax
"""

import logging
import uuid as uuid_module
from dataclasses import fields
from typing import Dict, Optional

from models.quote import Quote, QuoteItem, QuoteSettings
from models.mask_store import epoch_millis
from utils.logger import log_rejected
from constants import DEFAULT_PIXELS_PER_METER, DEFAULT_MATERIAL_COST, QUOTE_STATUSES


# ========================================
# Pure helpers
# ========================================

def area_to_square_meters(area_px: float, pixels_per_meter: float) -> float:
    """Convert a pixel area to square meters

    Raises:
        ValueError: If pixels_per_meter is not positive
    """
    if pixels_per_meter <= 0:
        raise ValueError(f"pixels_per_meter must be positive, got {pixels_per_meter}")
    return area_px / (pixels_per_meter * pixels_per_meter)


def line_subtotal(area_m2: float, material_cost: float, labor_cost: float, markup: float) -> float:
    return (material_cost + labor_cost) * area_m2 * (1 + markup / 100.0)


def calculate_totals(quote: Quote) -> Quote:
    """Recompute subtotal, tax and total in place"""
    quote.subtotal = sum(item.subtotal for item in quote.items)
    quote.tax_amount = quote.subtotal * (quote.tax_rate / 100.0)
    quote.total = quote.subtotal + quote.tax_amount
    return quote


# Fields an item update may change; the rest are identity or derived
_ITEM_EDITABLE = {'material_id', 'area', 'material_cost', 'labor_cost', 'markup', 'notes'}
_QUOTE_FIXED = {'id', 'items', 'subtotal', 'tax_amount', 'total', 'created_at', 'last_modified'}
_QUOTE_FIELDS = {f.name for f in fields(Quote)}


class QuoteBook:
    """Quotes keyed by id, priced from masks in a MaskStore

    Unknown quote or item ids are ignored (logged at DEBUG).
    """

    def __init__(self, store, settings: Optional[QuoteSettings] = None, clock=None):
        """
        Args:
            store: MaskStore the mask areas are read from
            settings: Pricing defaults
            clock: Returns epoch milliseconds (injectable for tests)
        """
        self._logger = logging.getLogger('QuoteBook')
        self.store = store
        self.settings = settings or QuoteSettings()
        self._clock = clock or epoch_millis
        self.quotes: Dict[str, Quote] = {}
        self.active_quote_id: Optional[str] = None

    # ========================================
    # Quotes
    # ========================================

    def get_quote(self, quote_id: Optional[str]) -> Optional[Quote]:
        if quote_id is None:
            return None
        return self.quotes.get(quote_id)

    @property
    def active_quote(self) -> Optional[Quote]:
        return self.get_quote(self.active_quote_id)

    def create_quote(self, name: str) -> str:
        """Create an empty draft quote and make it active

        Returns:
            New quote id
        """
        now = self._clock()
        quote = Quote(
            id=str(uuid_module.uuid4()),
            name=name,
            tax_rate=self.settings.default_tax_rate,
            created_at=now,
            last_modified=now,
        )
        self.quotes[quote.id] = quote
        self.active_quote_id = quote.id
        self._logger.info(f"Created quote '{name}' ({quote.id})")
        return quote.id

    def update_quote(self, quote_id: str, **updates) -> bool:
        """Change quote header fields (name, status, tax_rate, client_*, ...)

        Totals are recalculated so a tax_rate change takes effect.
        """
        quote = self.quotes.get(quote_id)
        if quote is None:
            return log_rejected(self._logger, 'update_quote', reason=f"unknown quote {quote_id}")
        if 'status' in updates and updates['status'] not in QUOTE_STATUSES:
            return log_rejected(self._logger, 'update_quote', reason=f"invalid status '{updates['status']}'")

        for key, value in updates.items():
            if key in _QUOTE_FIELDS and key not in _QUOTE_FIXED:
                setattr(quote, key, value)
            else:
                self._logger.debug(f"Ignoring quote field '{key}'")
        self._recalculate(quote)
        return True

    def delete_quote(self, quote_id: str) -> bool:
        if quote_id not in self.quotes:
            return log_rejected(self._logger, 'delete_quote', reason=f"unknown quote {quote_id}")
        del self.quotes[quote_id]
        if self.active_quote_id == quote_id:
            self.active_quote_id = None
        self._logger.info(f"Deleted quote {quote_id}")
        return True

    def set_active_quote(self, quote_id: Optional[str]) -> bool:
        if quote_id is not None and quote_id not in self.quotes:
            return log_rejected(self._logger, 'set_active_quote', reason=f"unknown quote {quote_id}")
        self.active_quote_id = quote_id
        return True

    # ========================================
    # Items
    # ========================================

    def add_quote_item(self, quote_id: str, mask_id: str, material_id: str,
                       pixels_per_meter: float = DEFAULT_PIXELS_PER_METER,
                       material_cost: float = DEFAULT_MATERIAL_COST) -> Optional[str]:
        """Price a mask's area with a material and add it as a line item

        Linear masks enclose no area and price at zero.

        Returns:
            New item id, or None if the quote or mask is unknown

        Raises:
            ValueError: If pixels_per_meter is not positive
        """
        quote = self.quotes.get(quote_id)
        if quote is None:
            log_rejected(self._logger, 'add_quote_item', mask_id, f"unknown quote {quote_id}")
            return None
        if not self.store.has_mask(mask_id):
            log_rejected(self._logger, 'add_quote_item', mask_id, "unknown mask")
            return None

        area = area_to_square_meters(self.store.mask_area_px(mask_id), pixels_per_meter)
        labor_cost = self.settings.default_labor_cost
        markup = self.settings.default_markup
        item = QuoteItem(
            id=str(uuid_module.uuid4()),
            mask_id=mask_id,
            material_id=material_id,
            area=area,
            material_cost=material_cost,
            labor_cost=labor_cost,
            markup=markup,
            subtotal=line_subtotal(area, material_cost, labor_cost, markup),
        )
        quote.items.append(item)
        self._recalculate(quote)
        self._logger.debug(f"Added item {item.id} to quote {quote_id}: {area:.3f} m2 of {material_id}")
        return item.id

    def update_quote_item(self, quote_id: str, item_id: str, **updates) -> bool:
        """Edit an item; its subtotal and the quote totals are recomputed"""
        quote = self.quotes.get(quote_id)
        item = quote.get_item(item_id) if quote else None
        if item is None:
            return log_rejected(self._logger, 'update_quote_item',
                                reason=f"unknown quote/item {quote_id}/{item_id}")

        for key, value in updates.items():
            if key in _ITEM_EDITABLE:
                setattr(item, key, value)
            else:
                self._logger.debug(f"Ignoring item field '{key}'")
        item.subtotal = line_subtotal(item.area, item.material_cost, item.labor_cost, item.markup)
        self._recalculate(quote)
        return True

    def remove_quote_item(self, quote_id: str, item_id: str) -> bool:
        quote = self.quotes.get(quote_id)
        if quote is None or quote.get_item(item_id) is None:
            return log_rejected(self._logger, 'remove_quote_item',
                                reason=f"unknown quote/item {quote_id}/{item_id}")
        quote.items = [item for item in quote.items if item.id != item_id]
        self._recalculate(quote)
        return True

    # ========================================
    # Settings
    # ========================================

    def update_settings(self, **settings):
        """Change pricing defaults for new quotes and items"""
        for key, value in settings.items():
            if hasattr(self.settings, key):
                setattr(self.settings, key, value)
            else:
                self._logger.debug(f"Ignoring quote setting '{key}'")

    def _recalculate(self, quote: Quote):
        calculate_totals(quote)
        quote.last_modified = self._clock()
