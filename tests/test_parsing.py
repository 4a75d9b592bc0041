"""Tests for the delimited-text record parser."""

import pytest

from backend.analytics.parsing import RecordParser, load_dataset, parse_dataset


class TestParseCell:
    @pytest.mark.parametrize("raw, expected", [
        ("12", 12.0),
        (" 3.5 ", 3.5),
        ("-0.25", -0.25),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("0", 0.0),
    ])
    def test_numbers(self, raw, expected):
        value = RecordParser.parse_cell(raw)
        assert isinstance(value, float)
        assert value == expected

    @pytest.mark.parametrize("raw", ["", "   ", "\t", None])
    def test_empty_is_missing_not_zero(self, raw):
        assert RecordParser.parse_cell(raw) is None

    @pytest.mark.parametrize("raw", [
        "Marikina", "2023-07-01", "12mm", "NaN", "inf", "1e999",
        "\u0663", "\uff11\uff12",
    ])
    def test_non_finite_or_non_numeric_is_text(self, raw):
        assert RecordParser.parse_cell(raw) == raw.strip()

    def test_text_is_trimmed(self):
        assert RecordParser.parse_cell("  Pasig ") == "Pasig"


class TestParse:
    def test_header_and_rows(self, sample_dataset):
        assert sample_dataset.columns == (
            "Date", "Rainfall_mm", "WaterLevel_m", "FloodOccurrence",
            "Latitude", "Longitude", "Station",
        )
        assert sample_dataset.row_count == 8
        first = sample_dataset[0]
        assert first["Date"] == "2023-07-01"
        assert first["Rainfall_mm"] == 12.5
        assert first["Station"] == "Marikina"

    def test_empty_cells_become_missing(self, sample_dataset):
        row = sample_dataset[4]
        assert row["WaterLevel_m"] is None
        assert row["Latitude"] is None
        assert row["Rainfall_mm"] == 0.0

    def test_empty_text_gives_empty_dataset(self):
        dataset = parse_dataset("")
        assert dataset.row_count == 0
        assert dataset.column_count == 0

    def test_blank_lines_only(self):
        assert parse_dataset("\n  \n\n").is_empty

    def test_header_only(self):
        dataset = parse_dataset("Rainfall_mm,WaterLevel_m\n")
        assert dataset.columns == ("Rainfall_mm", "WaterLevel_m")
        assert dataset.row_count == 0

    def test_blank_lines_are_skipped(self):
        dataset = parse_dataset("Rainfall_mm\n1\n\n   \n2\n")
        assert dataset.column_values("Rainfall_mm") == [1.0, 2.0]

    def test_short_rows_padded_with_missing(self):
        dataset = parse_dataset("a,b,c\n1\n1,2\n")
        assert dataset[0].as_dict() == {"a": 1.0, "b": None, "c": None}
        assert dataset[1]["c"] is None

    def test_long_rows_truncated(self):
        dataset = parse_dataset("a,b\n1,2,3,4\n")
        assert dataset[0].as_dict() == {"a": 1.0, "b": 2.0}

    def test_header_names_trimmed(self):
        dataset = parse_dataset(" Rainfall_mm , WaterLevel_m \n1,2\n")
        assert dataset.columns == ("Rainfall_mm", "WaterLevel_m")

    def test_duplicate_header_last_value_wins(self):
        dataset = parse_dataset("x,x\n1,2\n")
        assert dataset.columns == ("x", "x")
        assert dataset[0]["x"] == 2.0

    def test_crlf_and_bom(self):
        dataset = parse_dataset("\ufeffRainfall_mm,Station\r\n4,A\r\n")
        assert dataset.columns == ("Rainfall_mm", "Station")
        assert dataset[0]["Station"] == "A"

    def test_quoted_delimiter_is_not_special(self):
        dataset = parse_dataset('Station,Rainfall_mm\n"Pasig, East",10\n')
        assert dataset[0]["Station"] == '"Pasig'
        assert dataset[0]["Rainfall_mm"] == 'East"'

    @pytest.mark.parametrize("separator", ["\x0c", "\x0b", "\x1e", "\x85", "\u2028"])
    def test_only_line_feeds_end_records(self, separator):
        dataset = parse_dataset(f"Rainfall_mm,Station\n10,A{separator}B\n")
        assert dataset.row_count == 1
        assert dataset[0]["Station"] == f"A{separator}B"
        assert dataset[0]["Rainfall_mm"] == 10.0

    def test_custom_delimiter(self):
        dataset = parse_dataset("Rainfall_mm;Station\n7;A\n", delimiter=";")
        assert dataset[0]["Rainfall_mm"] == 7.0

    def test_mixed_column_keeps_text(self):
        dataset = parse_dataset("Rainfall_mm\n10\nn/a\n20\n")
        assert dataset.column_values("Rainfall_mm") == [10.0, "n/a", 20.0]


class TestLoad:
    def test_load_dataset(self, sample_file):
        dataset = load_dataset(str(sample_file))
        assert dataset.row_count == 8

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            load_dataset(str(tmp_path / "absent.csv"))
