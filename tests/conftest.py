"""Test fixtures shared by resolver, tool and web API tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from data import city_codes
from data.city_codes import parse_city_table

SAMPLE_CSV = """中文名,adcode,citycode
北京市,110000,010
东城区,110101,010
西城区,110102,010
浙江省,330000,\\N
杭州市,330100,0571
西湖区,330106,0571
滨江区,330108,0571
建德市,330182,0571
舟山市,330900,0580

湖北省,420000,\\N
仙桃市,429004,0728
台湾省,710000,1886
"""


@pytest.fixture(autouse=True)
def _reset_city_cache():
    city_codes.clear_cache()
    yield
    city_codes.clear_cache()


@pytest.fixture
def sample_cities():
    return parse_city_table(SAMPLE_CSV)


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "adcode_citycode.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
