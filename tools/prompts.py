"""
提示词模板
"""

import json

from mcp.server.fastmcp import FastMCP

SUMMARIZE_WEATHER_TEMPLATE = """Please summarize the following weather report:

{weather}

Provide a concise, human-readable summary including temperature, conditions, and any important weather information.
And answer in Chinese."""


def summarize_weather_text(weather: str) -> str:
    if not weather:
        raise ValueError("Weather argument is required")
    # JSON 字符串格式化后再嵌入，非 JSON 原样保留
    try:
        weather = json.dumps(json.loads(weather), ensure_ascii=False, indent=2)
    except ValueError:
        pass
    return SUMMARIZE_WEATHER_TEMPLATE.format(weather=weather)


def register_prompts(mcp: FastMCP) -> None:

    @mcp.prompt(description="summarize weather")
    def summarize_weather(weather: str) -> str:
        """Weather report in JSON format → 中文天气摘要"""
        return summarize_weather_text(weather)
