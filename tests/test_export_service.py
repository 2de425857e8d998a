import csv
import io
from datetime import date

import pytest

from services.export_service import build_csv, build_rows, default_filename, export_csv


def test_csv_layout(scenario):
    lines = build_csv(scenario).splitlines()
    assert lines[0] == '"Date","Amount","Category","Description"'
    assert lines[1] == '"2024-01-05","10.00","Food","Groceries"'
    assert lines[3] == '"2024-02-15","5.00","Bills","Phone top-up"'
    assert len(lines) == 4


def test_description_quotes_are_doubled(make_expense):
    text = build_csv([make_expense(3.456, description='Tea, "the good one"')])
    assert text.splitlines()[1] == '"2024-01-05","3.46","Food","Tea, ""the good one"""'


def test_csv_reads_back_with_csv_reader(make_expense):
    expense = make_expense(3.456, description='Tea, "the good one"\nand cake')
    rows = list(csv.reader(io.StringIO(build_csv([expense]))))
    assert rows == [
        ["Date", "Amount", "Category", "Description"],
        ["2024-01-05", "3.46", "Food", 'Tea, "the good one"\nand cake'],
    ]


def test_rows_are_raw_cell_values(make_expense):
    expense = make_expense(3.456, description='Tea, "good"')
    buf = io.StringIO()
    csv.writer(buf).writerows(build_rows([expense]))
    buf.seek(0)
    assert list(csv.reader(buf))[1] == ["2024-01-05", "3.46", "Food", 'Tea, "good"']


def test_empty_export_is_rejected(tmp_path):
    with pytest.raises(ValueError, match="No expenses to export"):
        build_csv([])
    with pytest.raises(ValueError, match="No expenses to export"):
        export_csv([], str(tmp_path / "out.csv"))
    assert not (tmp_path / "out.csv").exists()


def test_default_filename():
    assert default_filename(date(2024, 2, 9)) == "expenses-2024-02-09.csv"


def test_export_writes_file(tmp_path, scenario):
    path = tmp_path / "out.csv"
    assert export_csv(scenario, str(path)) == 3
    assert path.read_text(encoding="utf-8") == build_csv(scenario)
