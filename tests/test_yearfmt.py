from chronoline.utils.yearfmt import format_year


def test_format_year_edge_cases():
    assert format_year(None) == ""
    assert format_year(0) == "1 CE"  # no year zero on the label
    assert format_year(-480) == "480 BCE"
    assert format_year(1940) == "1940 CE"


def test_format_year_rounds_fractional_years():
    assert format_year(-479.5) == "480 BCE"
    assert format_year(-479.4) == "479 BCE"
    assert format_year(1939.5) == "1940 CE"
    assert format_year(0.2) == "1 CE"
