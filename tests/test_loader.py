import math

import pytest

from tollscope.loader import load_records, normalize, parse_number, read_csv_rows


@pytest.mark.parametrize("text, expected", [
    ("2001", 2001.0),
    (" 42 ", 42.0),
    ("3.5", 3.5),
    ("-7", -7.0),
    ("1e3", 1000.0),
])
def test_parse_number_accepts_plain_numbers(text, expected):
    assert parse_number(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", "abc", "12abc", "nan", "inf", "-Infinity", "1_000"])
def test_parse_number_rejects_invalid(text):
    assert parse_number(text) is None


def test_normalize_keeps_only_valid_rows_in_order(raw_rows):
    out = normalize(raw_rows)
    assert [(r.country, r.start_year) for r in out] == [
        ("India", 2001), ("Chile", 2010), ("India", 2004), ("Bangladesh", 1991), ("Nigeria", 2012),
    ]
    for r in out:
        assert math.isfinite(r.start_year)
        assert math.isfinite(r.total_deaths)
        assert r.total_deaths > 0


def test_normalize_keeps_raw_text_and_categories(raw_rows):
    first = normalize(raw_rows)[0]
    assert first.start_year_text == "2001"
    assert first.total_deaths_text == "20005"
    assert first.total_deaths == 20005
    assert first.disaster_type == "Earthquake"
    assert first.disaster_subtype == "Ground movement"


def test_normalize_missing_columns_become_empty():
    out = normalize([{"Start.Year": "1999", "Total.Deaths": "3"}])
    assert len(out) == 1
    assert out[0].country == ""
    assert out[0].disaster_group == ""


def test_normalize_drops_zero_negative_and_missing_deaths():
    rows = [
        {"Country": "A", "Start.Year": "2000", "Total.Deaths": "0"},
        {"Country": "B", "Start.Year": "2000", "Total.Deaths": "-4"},
        {"Country": "C", "Start.Year": "2000"},
        {"Country": "D", "Total.Deaths": "9"},
    ]
    assert normalize(rows) == []


def test_normalize_does_not_touch_input(raw_rows):
    before = [dict(r) for r in raw_rows]
    normalize(raw_rows)
    assert raw_rows == before


def test_end_to_end_scenario():
    from tollscope.engine import filter_by_country
    from tollscope.indices import distinct_sorted_countries

    rows = [
        {"Country": "X", "Start.Year": "2001", "Total.Deaths": "5", "Disaster.Group": "Natural"},
        {"Country": "Y", "Start.Year": "abc", "Total.Deaths": "3"},
        {"Country": "X", "Start.Year": "2002", "Total.Deaths": "0"},
    ]
    out = normalize(rows)
    assert len(out) == 1
    assert (out[0].country, out[0].start_year, out[0].total_deaths) == ("X", 2001, 5)
    assert distinct_sorted_countries(out) == ["X"]
    assert filter_by_country(out, "Y") == []


def test_read_csv_rows_keeps_blanks_as_text(csv_path):
    rows = read_csv_rows(str(csv_path))
    assert len(rows) == 5
    assert rows[2]["Total.Deaths"] == ""
    assert rows[3]["Disaster.Subtype"] == ""
    assert all(isinstance(v, str) for row in rows for v in row.values())


def test_read_csv_rows_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_csv_rows(str(tmp_path / "nope.csv"))


def test_load_records(csv_path):
    recs = load_records(str(csv_path))
    assert [r.country for r in recs] == ["India", "Chile", "Nigeria"]


def test_normalize_strips_category_whitespace():
    out = normalize([
        {"Country": " India ", "Start.Year": "2001", "Total.Deaths": "5", "Disaster.Group": " Natural"},
    ])
    assert out[0].country == "India"
    assert out[0].disaster_group == "Natural"
