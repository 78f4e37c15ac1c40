"""
行政区划代码 (adcode) 查询模块: 省/市/区 三级行政区划解析

读取高德地图 adcode 表 (adcode_citycode.csv)，提供以下功能:
  - 级别判断: adcode 末尾的 0 决定 省(province) / 市(city) / 区(district)
  - 上级查找: 按 adcode 前缀找到所属的省、市
  - 全称拼接: 直辖市不显示中间的市，县级市不显示所属地级市
  - 模糊搜索: 名称包含关键词即匹配，省/市自动展开为下属区县

adcode 结构 (6位):
  前2位 = 省, 前4位 = 市, 6位 = 区县
  例: 330106 = 浙江省(33) 杭州市(3301) 西湖区(330106)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Optional

logger = logging.getLogger(__name__)

AdminLevel = Literal["province", "city", "district"]

# 内置 CSV 路径 (CITY_CSV_PATH 环境变量可覆盖)
DEFAULT_CSV_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "adcode_citycode.csv")

# 直辖市：北京、天津、上海、重庆
MUNICIPALITY_CODES = frozenset({"110000", "120000", "310000", "500000"})

COUNTY_LEVEL_CITY_SUFFIX = "市"

# 累计结果达到该数量后不再展开后续匹配 (在每个匹配展开完毕后检查)
EXPAND_STOP_COUNT = 10
# 最终返回的最大条数
MAX_RESULTS = 100


class DataSourceError(Exception):
    """adcode 表无法读取或结构损坏"""


@dataclass(frozen=True)
class CityInfo:
    name: str       # 中文名
    adcode: str     # 行政区划代码
    citycode: str   # 城市编码 (电话区号, 原样透传)


# ── 表加载 ───────────────────────────────────────────────────────────────────
def parse_city_table(text: str) -> list[CityInfo]:
    """
    CSV 文本 → CityInfo 列表

    第一行为表头，空行跳过。每行按逗号切分后取前三列并去除首尾空白。
    不足三列的行视为数据损坏，抛出 DataSourceError。
    """
    cities = []
    for lineno, line in enumerate(text.split("\n")[1:], start=2):
        if not line.strip():
            continue
        fields = line.split(",")
        if len(fields) < 3:
            raise DataSourceError(f"第 {lineno} 行列数不足 (需要 3 列): {line.strip()!r}")
        name, adcode, citycode = (f.strip() for f in fields[:3])
        if not (len(adcode) == 6 and adcode.isdigit()):
            logger.warning("第 %d 行 adcode 格式异常: %r", lineno, adcode)
        cities.append(CityInfo(name=name, adcode=adcode, citycode=citycode))
    return cities


@lru_cache(maxsize=None)
def _load_cached(path: str) -> tuple[CityInfo, ...]:
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DataSourceError(f"adcode 表读取失败: {path} ({e})") from e
    cities = tuple(parse_city_table(text))
    logger.info("adcode 表加载完成: %s (%d 条)", path, len(cities))
    return cities


def load_city_table(path: Optional[str] = None) -> tuple[CityInfo, ...]:
    """adcode 表 (进程内只读取一次)"""
    return _load_cached(path or os.getenv("CITY_CSV_PATH") or DEFAULT_CSV_PATH)


def clear_cache() -> None:
    _load_cached.cache_clear()


# ── 级别判断 ─────────────────────────────────────────────────────────────────
def get_admin_level(adcode: str) -> AdminLevel:
    if adcode.endswith("0000"):
        return "province"
    if adcode.endswith("00"):
        return "city"
    return "district"


def is_municipality(info: CityInfo) -> bool:
    return info.adcode in MUNICIPALITY_CODES


def is_county_level_city(info: CityInfo) -> bool:
    """区级单位但名称以"市"结尾 → 县级市 (如 建德市 330182)"""
    return get_admin_level(info.adcode) == "district" and info.name.endswith(COUNTY_LEVEL_CITY_SUFFIX)


# ── 上级/下级查找 ────────────────────────────────────────────────────────────
def _find_by_code(adcode: str, cities) -> Optional[CityInfo]:
    return next((c for c in cities if c.adcode == adcode), None)


def find_province(adcode: str, cities) -> Optional[CityInfo]:
    return _find_by_code(adcode[:2] + "0000", cities)


def find_city(adcode: str, cities) -> Optional[CityInfo]:
    return _find_by_code(adcode[:4] + "00", cities)


def find_districts_in_province(province_prefix: str, cities) -> list[CityInfo]:
    """省代码前2位 → 该省下所有区级单位 (含市辖区、县、县级市)"""
    return [
        c for c in cities
        if get_admin_level(c.adcode) == "district" and c.adcode.startswith(province_prefix)
    ]


def find_districts_in_city(city_prefix: str, cities) -> list[CityInfo]:
    """市代码前4位 → 该市下所有区级单位"""
    return [
        c for c in cities
        if get_admin_level(c.adcode) == "district" and c.adcode.startswith(city_prefix)
    ]


# ── 全称拼接 ─────────────────────────────────────────────────────────────────
def build_full_name(info: CityInfo, cities) -> str:
    """
    构建完整的行政区划名称

      省级          → 浙江省
      市级          → 浙江省杭州市 (直辖市下的市级单位只显示自身名称)
      县级市        → 浙江省建德市 (不显示所属地级市)
      直辖市的区    → 北京市东城区
      普通区        → 浙江省杭州市西湖区
    上级缺失时退化为只拼接能找到的部分。
    """
    level = get_admin_level(info.adcode)
    if level == "province":
        return info.name

    province = find_province(info.adcode, cities)

    if level == "city":
        if province and not is_municipality(province):
            return province.name + info.name
        return info.name

    if is_county_level_city(info):
        if province:
            return province.name + info.name
        return info.name

    if province and is_municipality(province):
        return province.name + info.name

    city = find_city(info.adcode, cities)
    if province and city:
        return province.name + city.name + info.name
    if province:
        return province.name + info.name
    return info.name


# ── 查询 ─────────────────────────────────────────────────────────────────────
def get_city(adcode: str, cities=None) -> Optional[CityInfo]:
    """adcode 精确查找，找不到返回 None"""
    if cities is None:
        cities = load_city_table()
    return _find_by_code(adcode, cities)


def list_city(city: Optional[str] = None, cities=None) -> list[dict]:
    """
    按名称模糊搜索城市

    Args:
        city: 关键词，名称包含即匹配 (区分大小写)。None 或空字符串匹配全部。
        cities: adcode 表，默认使用内置表

    Returns:
        [{"name": 完整名称, "adcode": ..., "citycode": ...}, ...] 最多 MAX_RESULTS 条

    匹配到省 → 返回该省所有区县 (省下没有区县时不返回任何条目)
    匹配到市 → 返回该市所有区县，没有区县时返回市本身
    匹配到区 → 返回自身
    """
    if cities is None:
        cities = load_city_table()

    keyword = city or ""
    matches = [c for c in cities if keyword in c.name]

    expanded: list[CityInfo] = []
    for match in matches:
        level = get_admin_level(match.adcode)
        if level == "province":
            expanded.extend(find_districts_in_province(match.adcode[:2], cities))
        elif level == "city":
            districts = find_districts_in_city(match.adcode[:4], cities)
            expanded.extend(districts or [match])
        else:
            expanded.append(match)

        if len(expanded) >= EXPAND_STOP_COUNT:
            break

    return [
        {
            "name": build_full_name(c, cities),
            "adcode": c.adcode,
            "citycode": c.citycode,
        }
        for c in expanded[:MAX_RESULTS]
    ]


def search_city_code(query: str) -> dict:
    """
    城市名 → adcode 候选列表 (MCP 工具与 Web API 共用)

    Returns:
        {"query": ..., "total_count": N, "cities": [{name, adcode, citycode}, ...]}
    """
    query = query or ""
    results = list_city(query)
    return {
        "query": query,
        "total_count": len(results),
        "cities": results,
    }
