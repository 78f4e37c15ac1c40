"""
高德天气查询工具

高德开放平台 天气查询 API: https://restapi.amap.com/v3/weather/weatherInfo
"""

from mcp.server.fastmcp import FastMCP

import _helpers
from _helpers import AMAP_WEATHER_URL, _fetch_json

WEATHER_EXTENSIONS = ("base", "all")


async def fetch_weather(adcode: str, extensions: str = "base", **kwargs) -> dict:
    """
    高德天气 API 调用

    Args:
        adcode: 城市 adcode
        extensions: base = 实况天气, all = 预报天气
    """
    if not _helpers.GAODE_API_KEY:
        return {"error": "未设置 GAODE_API_KEY 环境变量"}

    adcode = (adcode or "").strip()
    if not adcode:
        return {"error": "adcode 不能为空"}

    if extensions not in WEATHER_EXTENSIONS:
        return {"error": f"extensions 必须是 {list(WEATHER_EXTENSIONS)} 之一"}

    params = {
        "city": adcode,
        "key": _helpers.GAODE_API_KEY,
        "extensions": extensions,
    }
    data = await _fetch_json(AMAP_WEATHER_URL, params, **kwargs)
    if data is None:
        return {"error": "天气 API 请求失败 (超时或服务器错误)"}
    if not isinstance(data, dict):
        return {"error": f"天气 API 响应格式异常: {type(data).__name__}"}

    # 高德: status "1" 成功, "0" 失败 (info 为错误信息)
    if str(data.get("status", "")) != "1":
        return {"error": f"高德 API 错误 {data.get('infocode', '')}: {data.get('info', '未知错误')}"}

    return data


def register_weather_tools(mcp: FastMCP) -> None:
    """天气相关 MCP 工具注册"""

    @mcp.tool()
    async def get_weather(adcode: str, extensions: str = "base") -> dict:
        """
        按 adcode 查询天气。

        Args:
            adcode: 6 位行政区划代码 (例如 '330106' = 杭州市西湖区)。
                    不知道时先用 search_city() 工具查询。
            extensions: 'base' 返回实况天气 (默认)，'all' 返回未来几天预报

        Returns:
            高德天气 API 原始 JSON: status, count, lives (实况) 或 forecasts (预报)
        """
        return await fetch_weather(adcode, extensions)
