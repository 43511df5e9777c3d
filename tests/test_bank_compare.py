import pytest

from tools.bank_compare import (
    DEFAULT_BANK_ROWS,
    ComparisonSelection,
    best_rate_ids,
    build_catalog,
    compare_products,
    comparison_summary,
    default_selection,
    load_catalog,
)
from tools.calc_mortgage import compute_amortization
from tools.policy import DEFAULT_POLICY

CATALOG = build_catalog(DEFAULT_BANK_ROWS)


def test_catalog_from_config_matches_builtin():
    catalog = load_catalog()
    assert list(catalog) == ["maybank", "cimb", "public-bank", "rhb"]
    assert catalog == CATALOG


def test_fourth_bank_is_ignored():
    sel = ComparisonSelection(("maybank", "cimb", "public-bank"))
    assert sel.add("rhb") == sel
    assert sel.toggle("rhb").ids == ("maybank", "cimb", "public-bank")
    assert not sel.can_add("rhb")
    assert sel.can_add("cimb")


def test_remove_always_allowed_and_frees_a_slot():
    sel = ComparisonSelection(("maybank", "cimb", "public-bank")).toggle("cimb")
    assert sel.ids == ("maybank", "public-bank")
    assert sel.add("rhb").ids == ("maybank", "public-bank", "rhb")


def test_add_is_idempotent():
    sel = ComparisonSelection(("maybank",))
    assert sel.add("maybank").ids == ("maybank",)


def test_default_selection():
    assert default_selection(DEFAULT_POLICY).ids == ("maybank", "cimb", "public-bank")


def test_compare_uses_each_package_rate():
    out = compare_products(500000, 30, ["maybank", "rhb"], CATALOG)
    assert set(out) == {"maybank", "rhb"}
    expected = compute_amortization(500000, 4.25, 30)
    assert out["maybank"].monthly_payment == pytest.approx(expected.monthly_payment)
    assert out["rhb"].monthly_payment > out["maybank"].monthly_payment


def test_compare_skips_unknown_ids_and_empty_inputs():
    assert set(compare_products(500000, 30, ["maybank", "nope"], CATALOG)) == {"maybank"}
    assert compare_products(0, 30, ["maybank"], CATALOG) == {}
    assert compare_products(500000, 0, ["maybank"], CATALOG) == {}


def test_zero_rate_package_repays_straight_line():
    rows = [dict(DEFAULT_BANK_ROWS[0], id="promo", interest_rate=0)]
    out = compare_products(120000, 10, ["promo"], build_catalog(rows))
    assert out["promo"].monthly_payment == pytest.approx(1000)
    assert out["promo"].total_interest == pytest.approx(0)


def test_best_rate_flags_all_ties():
    assert best_rate_ids(["maybank", "cimb", "public-bank"], CATALOG) == ["public-bank"]
    rows = DEFAULT_BANK_ROWS + [dict(DEFAULT_BANK_ROWS[2], id="public-bank-2")]
    catalog = build_catalog(rows)
    assert best_rate_ids(["public-bank", "rhb", "public-bank-2"], catalog) == ["public-bank", "public-bank-2"]
    assert best_rate_ids([], CATALOG) == []


def test_summary():
    s = comparison_summary(["maybank", "cimb", "rhb"], CATALOG)
    assert s.lowest_rate == 4.25
    assert s.highest_rate == 4.40
    assert s.count == 3
    assert comparison_summary([], CATALOG) is None


def test_bad_catalog_rows():
    with pytest.raises(ValueError, match="missing"):
        build_catalog([{"id": "x", "bank_name": "X"}])
    with pytest.raises(ValueError, match="Duplicate"):
        build_catalog([DEFAULT_BANK_ROWS[0], DEFAULT_BANK_ROWS[0]])


def test_very_long_term_compares_without_error():
    out = compare_products(500000, 20000, ["maybank"], CATALOG)
    assert out["maybank"].monthly_payment == pytest.approx(500000 * 0.0425 / 12)


def test_selection_normalised_on_construction():
    sel = ComparisonSelection(("maybank", "maybank", "cimb", "public-bank", "rhb"))
    assert sel.ids == ("maybank", "cimb", "public-bank")
    # a stored selection longer than a lowered limit is cut back
    assert ComparisonSelection(("maybank", "cimb", "rhb"), limit=2).ids == ("maybank", "cimb")
