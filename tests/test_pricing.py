from datetime import date

from services.pricing import count_nights, iter_nights, price_breakdown, round_half_up


def test_three_nights_at_2000():
    assert price_breakdown(2000, 3) == {"subtotal": 6000, "tax": 720, "total": 6720}


def test_price_breakdown_is_deterministic():
    assert price_breakdown(2500, 2) == price_breakdown(2500, 2)


def test_tax_rounds_half_up():
    # 12% of 1375 is 165.0, of 1354 is 162.48, of 1396 is 167.52
    assert price_breakdown(1375, 1)["tax"] == 165
    assert price_breakdown(1354, 1)["tax"] == 162
    assert price_breakdown(1396, 1)["tax"] == 168
    assert round_half_up("2.5") == 3
    assert round_half_up("3.5") == 4


def test_nights_count_whole_days():
    assert count_nights(date(2025, 3, 1), date(2025, 3, 2)) == 1
    assert count_nights(date(2025, 2, 27), date(2025, 3, 2)) == 3


def test_iter_nights_excludes_checkout():
    nights = list(iter_nights(date(2025, 3, 30), date(2025, 4, 2)))
    assert nights == [date(2025, 3, 30), date(2025, 3, 31), date(2025, 4, 1)]


def test_iter_nights_empty_for_same_day():
    assert list(iter_nights(date(2025, 3, 1), date(2025, 3, 1))) == []
