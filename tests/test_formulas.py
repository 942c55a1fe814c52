from homebudget.formulas import FORMULAS


def test_every_group_has_items():
    for group in FORMULAS:
        assert group["category"]
        assert all(len(item) == 3 for item in group["items"])


def test_welcome_tax_formula_lists_brackets():
    tax = next(g for g in FORMULAS if g["category"] == "Quebec Welcome Tax")
    formula = tax["items"][0][1]
    assert formula.startswith("0.5% (≤$55,200)")
    assert formula.endswith("2.5% (>$1,000,000)")
