from datetime import date

import pytest

from utils import app_config
from utils.currency import amount_search_text, format_currency
from utils.date_helpers import (
    format_display_date, is_same_month, month_key, normalize_date,
    parse_display_date, short_month,
)


@pytest.mark.parametrize("amount, text", [(20.0, "20"), (12.5, "12.5"), (0.1, "0.1"), (1000000, "1000000")])
def test_amount_search_text(amount, text):
    assert amount_search_text(amount) == text


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(3, "€") == "€3.00"


def test_month_helpers():
    assert month_key("2024-02-15") == "2024-02"
    assert short_month("2024-02") == "Feb 2024"
    assert is_same_month("2024-02-29", date(2024, 2, 1))
    assert not is_same_month("2023-02-01", date(2024, 2, 1))
    with pytest.raises(ValueError):
        month_key("garbage")


def test_normalize_date():
    assert normalize_date("2024-01-28T23:59:59.000Z") == "2024-01-28"
    assert normalize_date("2024/01/28") == "2024-01-28"
    with pytest.raises(ValueError):
        normalize_date("")


def test_display_dates_round_trip():
    assert format_display_date("2024-02-09", "DD.MM.YYYY") == "09.02.2024"
    assert parse_display_date("09.02.2024", "DD.MM.YYYY") == date(2024, 2, 9)
    assert parse_display_date("2024-02-09", "MM/DD/YYYY") == date(2024, 2, 9)


def test_config_round_trip(tmp_path):
    path = tmp_path / "cfg" / "config.json"
    app_config.save_config({"db_folder": "/data", "log_level": "debug"}, path)
    cfg = app_config.load_config(path)
    assert app_config.get_db_folder(cfg) == "/data"
    assert app_config.get_log_level(cfg) == "DEBUG"
    assert not path.with_suffix(".tmp").exists()


def test_corrupt_config_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")
    assert app_config.load_config(path) == {}
    assert app_config.get_log_level({}) == "INFO"
    assert app_config.get_db_folder({}) is None
