import pytest

from tollscope.loader import normalize

HEADER = "Country,Start.Year,Total.Deaths,Disaster.Group,Disaster.Subgroup,Disaster.Type,Disaster.Subtype\n"


def raw(country, year, deaths, group="Natural", **extra):
    row = {"Country": country, "Start.Year": year, "Total.Deaths": deaths, "Disaster.Group": group}
    row.update(extra)
    return row


@pytest.fixture
def raw_rows():
    return [
        raw("India", "2001", "20005", "Natural", **{"Disaster.Subgroup": "Geophysical", "Disaster.Type": "Earthquake", "Disaster.Subtype": "Ground movement"}),
        raw("Chile", "2010", "562"),
        raw("India", "2004", "16389"),
        raw("Bangladesh", "1991", "138866"),
        raw("Chile", "1960", "0"),
        raw("Nigeria", "abc", "12", "Technological"),
        raw("Nigeria", "2012", "150", "Technological"),
        raw("France", "2003", "", "Natural"),
    ]


@pytest.fixture
def records(raw_rows):
    return normalize(raw_rows)


@pytest.fixture
def csv_path(tmp_path):
    p = tmp_path / "disasters.csv"
    p.write_text(
        HEADER
        + "India,2001,20005,Natural,Geophysical,Earthquake,Ground movement\n"
        + "Chile,2010,562,Natural,Geophysical,Earthquake,Ground movement\n"
        + "Chile,1960,,Natural,Geophysical,Earthquake,Tsunami\n"
        + "Nigeria,2012,150,Technological,Transport,Air,\n"
        + "Japan,2011,0,Natural,Hydrological,Flood,Flash flood\n",
        encoding="utf-8",
    )
    return p
