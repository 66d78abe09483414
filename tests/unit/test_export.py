"""
Unit tests for the exporter (tabstore.export) and the store's
export_csv() / export_json().

Tests CSV escaping, header derivation, JSON formatting, and file export
in every supported format using pytest's tmp_path fixture.
"""

from __future__ import annotations

import json

import pandas as pd
import pytest

from tabstore.config import StoreConfig
from tabstore.exceptions import ExportError
from tabstore.export import escape_csv_value, to_csv_text, to_json_text, write_export
from tabstore.store import TabularStore


# ---------------------------------------------------------------------------
# CSV escaping
# ---------------------------------------------------------------------------

class TestEscapeCsvValue:
    """Tests for escape_csv_value()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("plain", "plain"),
            ("", '""'),
            (None, '""'),
            ("a,b", '"a,b"'),
            ('say "hi"', '"say ""hi"""'),
            ("two\nlines", '"two\nlines"'),
            ("cr\rhere", '"cr\rhere"'),
            ("  padded  ", "  padded  "),
            (42, "42"),
            (True, "true"),
        ],
    )
    def test_values(self, value, expected):
        """Empty cells and cells with specials are quoted; others pass through."""
        assert escape_csv_value(value) == expected

    def test_quoted_title(self):
        """A comma and inner quotes together are escaped once."""
        assert escape_csv_value('A, B "Quoted"') == '"A, B ""Quoted"""'


# ---------------------------------------------------------------------------
# CSV text
# ---------------------------------------------------------------------------

class TestExportCsv:
    """Tests for TabularStore.export_csv() and to_csv_text()."""

    def test_empty_store(self):
        """An empty store exports an empty string."""
        assert TabularStore().export_csv() == ""

    def test_header_and_rows(self):
        """Header then one line per record, each newline-terminated."""
        s = TabularStore()
        s.initialize([{"name": "Civic", "price": "22000"}, {"name": "Odyssey", "price": "38000"}])
        assert s.export_csv() == "name,price\nCivic,22000\nOdyssey,38000\n"

    def test_quoted_cell(self):
        """Cells with commas and quotes are escaped."""
        s = TabularStore()
        s.initialize([{"title": 'A, B "Quoted"'}])
        assert s.export_csv().splitlines()[1] == '"A, B ""Quoted"""'

    def test_missing_key_is_quoted_empty(self):
        """A record lacking a column writes a quoted empty cell."""
        s = TabularStore()
        s.initialize([{"a": "1", "b": "2"}, {"a": "3"}])
        assert s.export_csv() == 'a,b\n1,2\n3,""\n'

    def test_columns_from_first_record_only(self):
        """Keys absent from the first record are not exported."""
        s = TabularStore()
        s.initialize([{"a": "1"}, {"a": "2", "b": "ignored"}])
        assert s.export_csv() == "a\n1\n2\n"

    def test_crlf_terminator(self):
        """The configured line terminator ends every line."""
        s = TabularStore(StoreConfig(line_terminator="\r\n"))
        s.initialize([{"a": "1"}])
        assert s.export_csv() == "a\r\n1\r\n"

    def test_header_is_escaped(self):
        """Column names get the same escaping as cells."""
        assert to_csv_text([{"x,y": "1"}], ["x,y"]) == '"x,y"\n1\n'

    def test_non_string_cells(self):
        """Numbers, booleans, None and missing keys are rendered as text."""
        records = [{"n": 1, "b": False, "z": None}]
        assert to_csv_text(records, ["n", "b", "z", "gone"]) == 'n,b,z,gone\n1,false,"",""\n'

    def test_to_csv_text_empty(self):
        """No records export an empty string, header included."""
        assert to_csv_text([], ["a"]) == ""


# ---------------------------------------------------------------------------
# JSON text
# ---------------------------------------------------------------------------

class TestExportJson:
    """Tests for TabularStore.export_json() and to_json_text()."""

    def test_empty_store(self):
        """An empty store exports an empty JSON array."""
        assert json.loads(TabularStore().export_json()) == []

    def test_indented(self):
        """Output is indented by two spaces by default."""
        s = TabularStore()
        s.initialize([{"a": "1"}])
        assert s.export_json() == '[\n  {\n    "a": "1"\n  }\n]'

    def test_indent_from_config(self):
        """The indent comes from config.json_indent."""
        s = TabularStore(StoreConfig(json_indent=4))
        s.initialize([{"a": "1"}])
        assert '\n        "a"' in s.export_json()

    def test_scalars_kept(self):
        """Non-string values keep their JSON types."""
        text = to_json_text([{"n": 1, "f": 1.5, "b": False, "z": None}])
        assert json.loads(text) == [{"n": 1, "f": 1.5, "b": False, "z": None}]

    def test_non_ascii_written_verbatim(self):
        """Non-ASCII text is not escaped."""
        assert "Škoda" in to_json_text([{"make": "Škoda"}])


# ---------------------------------------------------------------------------
# File export
# ---------------------------------------------------------------------------

class TestWriteExport:
    """Tests for write_export()."""

    def test_csv_file(self, tmp_path, store):
        """The CSV file holds exactly export_csv()."""
        path = write_export(store, tmp_path / "cars.csv")
        assert path.endswith("cars.csv")
        with open(path, "r", encoding="utf-8", newline="") as f:
            assert f.read() == store.export_csv()

    def test_csv_file_keeps_crlf(self, tmp_path):
        """CRLF terminators are written unchanged."""
        s = TabularStore(StoreConfig(line_terminator="\r\n"))
        s.initialize([{"a": "1"}])
        path = write_export(s, tmp_path / "a.csv")
        with open(path, "rb") as f:
            assert f.read() == b"a\r\n1\r\n"

    def test_json_file(self, tmp_path, store, cars):
        """The JSON file loads back to the records."""
        path = write_export(store, tmp_path / "cars.json")
        with open(path, "r", encoding="utf-8") as f:
            assert json.load(f) == cars

    def test_parquet_file(self, tmp_path, store):
        """The Parquet file has the key-union columns; missing cells are null."""
        path = write_export(store, tmp_path / "cars.parquet")
        df = pd.read_parquet(path)
        assert list(df.columns) == ["name", "class", "price", "image"]
        assert len(df) == 4
        assert pd.isna(df.loc[1, "image"])

    def test_parquet_stringifies_mixed_cells(self, tmp_path):
        """Mixed-type columns are written as text."""
        s = TabularStore()
        s.initialize([{"v": 1}, {"v": "x"}, {"v": True}])
        path = write_export(s, tmp_path / "mixed.parquet")
        assert list(pd.read_parquet(path)["v"]) == ["1", "x", "true"]

    def test_explicit_format_overrides_suffix(self, tmp_path, store):
        """output_format wins over the file suffix."""
        path = write_export(store, tmp_path / "cars.out", output_format="json")
        with open(path, "r", encoding="utf-8") as f:
            assert len(json.load(f)) == 4

    def test_creates_parent_dirs(self, tmp_path, store):
        """Missing parent directories are created."""
        nested = tmp_path / "a" / "b" / "cars.csv"
        write_export(store, nested)
        assert nested.exists()

    def test_unsupported_format(self, tmp_path, store):
        """An unknown suffix raises ExportError."""
        with pytest.raises(ExportError, match="Unsupported output format"):
            write_export(store, tmp_path / "cars.xlsx")

    def test_write_failure_wrapped(self, tmp_path, store):
        """OS errors while writing are wrapped in ExportError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(ExportError, match="Failed to write"):
            write_export(store, blocker / "cars.csv")
