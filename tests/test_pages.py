from streamlit.testing.v1 import AppTest


def test_methodology_shows_configured_dsr_bands(tmp_path, monkeypatch):
    p = tmp_path / "policy.yaml"
    p.write_text("dsr_bands:\n  excellent: 25\n  good: 40\n", encoding="utf-8")
    monkeypatch.setenv("MORTGAGEMY_POLICY", str(p))
    at = AppTest.from_file("../app/pages/methodology.py").run()
    assert not at.exception
    text = "\n".join(m.value for m in at.markdown)
    assert "≤25% **Excellent**" in text
    assert "≤40% **Good**" in text
