from app.utils import first_non_empty, parse_leading_float, parse_leading_int


def test_parse_leading_float_handles_text_and_numbers():
    assert parse_leading_float("8.25") == 8.25
    assert parse_leading_float(" 6.5 / 10") == 6.5
    assert parse_leading_float(7) == 7.0
    assert parse_leading_float("") == 0
    assert parse_leading_float(None) == 0
    assert parse_leading_float("NaN") == 0
    assert parse_leading_float(float("nan")) == 0


def test_parse_leading_int_truncates():
    assert parse_leading_int("2021") == 2021
    assert parse_leading_int("2021-03-04") == 2021
    assert parse_leading_int(1999.9) == 1999
    assert parse_leading_int("abc") == 0
    assert parse_leading_int(True) == 0


def test_first_non_empty_skips_blank_values():
    assert first_non_empty("", None, "value", "other") == "value"
    assert first_non_empty(None, "") == ""
