"""
城市 adcode 查询工具与资源

- city://{adcode} 资源: 列出/读取城市
- search_city / get_city_info 工具: 城市名 → adcode
"""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.resources import TextResource

from data.city_codes import DataSourceError, get_city, list_city, search_city_code

logger = logging.getLogger(__name__)

CITY_URI = "city://{adcode}"


def _city_text(name: str, adcode: str) -> str:
    return f"city: {name} adcode: {adcode}"


def register_city_tools(mcp: FastMCP) -> None:
    """城市相关 MCP 工具与资源注册"""

    @mcp.tool()
    def search_city(query: str = "") -> dict:
        """
        按城市名搜索高德 adcode。查询天气前先用此工具确认 adcode。

        Args:
            query: 城市/区县名称关键词，例如 '杭州'、'西湖区'、'北京'。
                   匹配到省或市时返回其下属区县。

        Returns:
            {
                "query": "杭州",
                "total_count": 10,
                "cities": [{"name": "浙江省杭州市西湖区", "adcode": "330106", "citycode": "0571"}, ...]
            }
        """
        return search_city_code(query)

    @mcp.tool()
    def get_city_info(adcode: str) -> dict:
        """
        按 adcode 精确查询城市。

        Args:
            adcode: 6 位行政区划代码，例如 '110101'

        Returns:
            {"name": "东城区", "adcode": "110101", "citycode": "010"}
        """
        city = get_city(adcode.strip())
        if city is None:
            return {"error": f"未找到 adcode 为 {adcode} 的城市"}
        return {"name": city.name, "adcode": city.adcode, "citycode": city.citycode}

    @mcp.resource(CITY_URI, mime_type="text/plain")
    def read_city(adcode: str) -> str:
        """按 adcode 读取城市"""
        city = get_city(adcode)
        if city is None:
            raise ValueError("City not found")
        return _city_text(city.name, city.adcode)

    # resources/list 只返回具体资源，模板不会被列出
    # 列表名称为完整名称，读取内容与 read_city 一致 (原始名称)
    # adcode 表不可读时只影响城市相关调用，天气与 flomo 工具照常注册
    try:
        cities = list_city()
    except DataSourceError as e:
        logger.error("city resources not registered: %s", e)
        return
    for city in cities:
        mcp.add_resource(TextResource(
            uri=CITY_URI.format(adcode=city["adcode"]),
            name=city["name"],
            description=city["name"],
            mime_type="text/plain",
            text=read_city(city["adcode"]),
        ))
    logger.debug("city resources registered: %d", len(cities))
