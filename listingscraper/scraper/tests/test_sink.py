"""
Tests for the CSV and JSON sinks.
"""

import csv
import json
import os
import stat
import pytest
from unittest.mock import patch

from listingscraper.scraper import CsvSink, JsonSink, OutputFormat, PersistenceError, Record, create_sink

COLUMNS = ("name", "price", "url", "page")
HEADERS = {"name": "Product Name", "price": "Price", "url": "Product URL", "page": "Page Number"}


@pytest.fixture
def products():
    return [
        Record.create(1, key="Rose Water", name="Rose Water", price="৳350", url="https://shop.example.com/rose"),
        Record.create(2, key="Aloe Gel, 100ml", name="Aloe Gel, 100ml", price=None, url="https://shop.example.com/aloe"),
    ]


class TestCsvSink:
    """Tests for CSV output."""

    def test_header_row_and_values(self, tmp_path, products):
        destination = tmp_path / "products.csv"

        CsvSink(COLUMNS, HEADERS).persist(products, str(destination))

        with open(destination, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["Product Name", "Price", "Product URL", "Page Number"]
        assert rows[1] == ["Rose Water", "৳350", "https://shop.example.com/rose", "1"]
        # Missing values become empty cells, commas are quoted
        assert rows[2] == ["Aloe Gel, 100ml", "", "https://shop.example.com/aloe", "2"]

    def test_headers_default_to_column_names(self, products):
        content = CsvSink(["name", "page"]).render(products)
        assert content.splitlines()[0] == "name,page"

    def test_empty_run_writes_header_only(self, tmp_path):
        destination = tmp_path / "empty.csv"

        CsvSink(COLUMNS, HEADERS).persist([], str(destination))

        assert destination.read_text(encoding="utf-8").strip() == "Product Name,Price,Product URL,Page Number"


class TestJsonSink:
    """Tests for JSON output."""

    def test_list_of_objects(self, tmp_path, products):
        destination = tmp_path / "out" / "products.json"

        JsonSink(["name", "price", "url"], {"url": "productUrl"}).persist(products, str(destination))

        data = json.loads(destination.read_text(encoding="utf-8"))
        assert data == [
            {"name": "Rose Water", "price": "৳350", "productUrl": "https://shop.example.com/rose"},
            {"name": "Aloe Gel, 100ml", "price": None, "productUrl": "https://shop.example.com/aloe"},
        ]

    def test_non_ascii_kept_verbatim(self, products):
        assert "৳350" in JsonSink(["price"]).render(products)


class TestPersistence:
    """Tests for atomic replacement."""

    def test_failed_write_leaves_destination_intact(self, tmp_path, products):
        destination = tmp_path / "products.csv"
        destination.write_text("previous run", encoding="utf-8")

        with patch("listingscraper.scraper.sink.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceError) as exc_info:
                CsvSink(COLUMNS, HEADERS).persist(products, str(destination))

        assert destination.read_text(encoding="utf-8") == "previous run"
        assert os.listdir(tmp_path) == ["products.csv"]
        assert exc_info.value.details["error"] == "disk full"

    def test_directory_destination_fails(self, tmp_path, products):
        with pytest.raises(PersistenceError):
            JsonSink(COLUMNS).persist(products, str(tmp_path))

    def test_existing_file_is_replaced(self, tmp_path, products):
        destination = tmp_path / "products.json"
        destination.write_text("stale", encoding="utf-8")

        JsonSink(["name"]).persist(products[:1], str(destination))

        assert json.loads(destination.read_text(encoding="utf-8")) == [{"name": "Rose Water"}]


def test_create_sink():
    assert isinstance(create_sink(OutputFormat.CSV, COLUMNS), CsvSink)
    assert isinstance(create_sink("json", COLUMNS), JsonSink)


def test_output_permissions_follow_umask(tmp_path, products):
    destination = tmp_path / "products.csv"
    umask = os.umask(0o022)
    try:
        CsvSink(COLUMNS, HEADERS).persist(products, str(destination))
    finally:
        os.umask(umask)

    assert stat.S_IMODE(os.stat(destination).st_mode) == 0o644
