"""Quote records consumed by the quoting UI and PDF export."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from constants import DEFAULT_MARKUP, DEFAULT_TAX_RATE, DEFAULT_LABOR_COST


@dataclass
class QuoteItem:
    """One priced line: a mask's area with a material."""
    id: str
    mask_id: str
    material_id: str
    area: float            # square meters
    material_cost: float   # per square meter
    labor_cost: float      # per square meter
    markup: float          # percent
    subtotal: float = 0.0
    notes: Optional[str] = None


@dataclass
class Quote:
    id: str
    name: str
    items: List[QuoteItem] = field(default_factory=list)
    subtotal: float = 0.0
    tax_rate: float = DEFAULT_TAX_RATE   # percent
    tax_amount: float = 0.0
    total: float = 0.0
    status: str = 'draft'
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    project_address: Optional[str] = None
    notes: Optional[str] = None
    created_at: int = 0
    last_modified: int = 0

    def get_item(self, item_id) -> Optional[QuoteItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class QuoteSettings:
    """Defaults applied to new quotes and items."""
    default_markup: float = DEFAULT_MARKUP
    default_tax_rate: float = DEFAULT_TAX_RATE
    default_labor_cost: float = DEFAULT_LABOR_COST
