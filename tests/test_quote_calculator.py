"""
Tests for area conversion, line pricing and the QuoteBook.
"""
import pytest

from models.quote import Quote, QuoteItem, QuoteSettings
from services.quote_calculator import (
    QuoteBook, area_to_square_meters, line_subtotal, calculate_totals,
)


# ══════════════════════════════════════════════════════════════════════════
# Pure helpers
# ══════════════════════════════════════════════════════════════════════════

class TestPricingHelpers:

    def test_area_conversion(self):
        assert area_to_square_meters(20000, 100) == pytest.approx(2.0)

    @pytest.mark.parametrize('ppm', [0, -5])
    def test_non_positive_ppm_raises(self, ppm):
        with pytest.raises(ValueError):
            area_to_square_meters(100, ppm)

    def test_line_subtotal(self):
        # (50 + 15) * 2 * 1.25
        assert line_subtotal(2.0, 50, 15, 25) == pytest.approx(162.5)

    def test_totals(self):
        quote = Quote(id='q', name='Q', tax_rate=10.0, items=[
            QuoteItem('a', 'm1', 'oak', 1, 0, 0, 0, subtotal=100.0),
            QuoteItem('b', 'm2', 'oak', 1, 0, 0, 0, subtotal=50.0),
        ])
        calculate_totals(quote)
        assert quote.subtotal == pytest.approx(150.0)
        assert quote.tax_amount == pytest.approx(15.0)
        assert quote.total == pytest.approx(165.0)


# ══════════════════════════════════════════════════════════════════════════
# QuoteBook
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def book(store, clock):
    return QuoteBook(store, clock=clock)


@pytest.fixture
def big_square(store):
    # 200 x 100 px = 2 m2 at 100 px/m
    return store.create_mask([(0, 0), (200, 0), (200, 100), (0, 100)], mask_id='big')


class TestQuoteBook:

    def test_create_quote_uses_default_tax_and_activates(self, book):
        quote_id = book.create_quote('Backyard')
        quote = book.get_quote(quote_id)
        assert quote.tax_rate == 8.5
        assert quote.status == 'draft'
        assert book.active_quote_id == quote_id

    def test_add_item_prices_mask_area(self, book, big_square):
        quote_id = book.create_quote('Q')
        item_id = book.add_quote_item(quote_id, big_square.id, 'pavers')
        item = book.get_quote(quote_id).get_item(item_id)
        assert item.area == pytest.approx(2.0)
        assert item.material_cost == 50
        assert item.labor_cost == 15
        assert item.markup == 25
        assert item.subtotal == pytest.approx(162.5)

        quote = book.get_quote(quote_id)
        assert quote.subtotal == pytest.approx(162.5)
        assert quote.tax_amount == pytest.approx(162.5 * 0.085)
        assert quote.total == pytest.approx(162.5 * 1.085)

    def test_custom_calibration_and_cost(self, book, big_square):
        quote_id = book.create_quote('Q')
        item_id = book.add_quote_item(quote_id, big_square.id, 'turf',
                                      pixels_per_meter=200, material_cost=5)
        item = book.get_quote(quote_id).get_item(item_id)
        assert item.area == pytest.approx(0.5)
        assert item.subtotal == pytest.approx((5 + 15) * 0.5 * 1.25)

    def test_linear_mask_prices_at_zero(self, book, line_mask):
        quote_id = book.create_quote('Q')
        item_id = book.add_quote_item(quote_id, line_mask.id, 'edging')
        assert book.get_quote(quote_id).get_item(item_id).subtotal == 0.0

    def test_unknown_ids_are_noops(self, book, big_square):
        assert book.add_quote_item('nope', big_square.id, 'x') is None
        quote_id = book.create_quote('Q')
        assert book.add_quote_item(quote_id, 'ghost', 'x') is None
        assert book.update_quote_item(quote_id, 'ghost', markup=0) is False
        assert book.remove_quote_item(quote_id, 'ghost') is False
        assert book.update_quote('nope', name='x') is False
        assert book.get_quote(quote_id).items == []

    def test_update_item_recalculates(self, book, big_square):
        quote_id = book.create_quote('Q')
        item_id = book.add_quote_item(quote_id, big_square.id, 'pavers')
        assert book.update_quote_item(quote_id, item_id, markup=0, labor_cost=0)
        quote = book.get_quote(quote_id)
        assert quote.items[0].subtotal == pytest.approx(100.0)
        assert quote.total == pytest.approx(108.5)

    def test_update_item_ignores_identity_fields(self, book, big_square):
        quote_id = book.create_quote('Q')
        item_id = book.add_quote_item(quote_id, big_square.id, 'pavers')
        book.update_quote_item(quote_id, item_id, id='hijack', subtotal=1.0)
        item = book.get_quote(quote_id).items[0]
        assert item.id == item_id
        assert item.subtotal == pytest.approx(162.5)

    def test_remove_item_recalculates(self, book, big_square):
        quote_id = book.create_quote('Q')
        item_id = book.add_quote_item(quote_id, big_square.id, 'pavers')
        assert book.remove_quote_item(quote_id, item_id)
        quote = book.get_quote(quote_id)
        assert quote.items == []
        assert quote.total == 0.0

    def test_tax_rate_change_recalculates(self, book, big_square):
        quote_id = book.create_quote('Q')
        book.add_quote_item(quote_id, big_square.id, 'pavers')
        assert book.update_quote(quote_id, tax_rate=0.0, client_name='Dana')
        quote = book.get_quote(quote_id)
        assert quote.total == pytest.approx(162.5)
        assert quote.client_name == 'Dana'

    def test_invalid_status_rejected(self, book):
        quote_id = book.create_quote('Q')
        assert book.update_quote(quote_id, status='lost') is False
        assert book.update_quote(quote_id, status='sent')
        assert book.get_quote(quote_id).status == 'sent'

    def test_delete_active_quote_clears_active(self, book):
        first = book.create_quote('A')
        second = book.create_quote('B')
        assert book.delete_quote(second)
        assert book.active_quote_id is None
        assert book.set_active_quote(first)
        assert book.active_quote.name == 'A'
        assert book.set_active_quote('missing') is False

    def test_update_settings_affects_new_items(self, book, big_square):
        book.update_settings(default_markup=0, default_labor_cost=0, unknown=1)
        quote_id = book.create_quote('Q')
        item_id = book.add_quote_item(quote_id, big_square.id, 'pavers')
        assert book.get_quote(quote_id).get_item(item_id).subtotal == pytest.approx(100.0)

    def test_settings_defaults(self):
        assert QuoteSettings() == QuoteSettings(25.0, 8.5, 15.0)
