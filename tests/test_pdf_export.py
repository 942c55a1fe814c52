import pytest

from export.pdf_export import build_summary_pdf
from homebudget.snapshot import calculate


def test_summary_pdf_renders(inputs):
    output = build_summary_pdf(calculate(inputs))
    assert output.startswith(b"%PDF")


def test_requires_override_with_critical(inputs):
    risky = inputs.model_copy(update={"down_payment": 2000})
    snap = calculate(risky)
    assert any(w.severity == "critical" for w in snap.warnings)
    with pytest.raises(ValueError):
        build_summary_pdf(snap)


def test_override_allows_export(inputs):
    risky = inputs.model_copy(update={"down_payment": 2000})
    output = build_summary_pdf(calculate(risky), override_reason="Gifted funds <pending>")
    assert output.startswith(b"%PDF")
