"""
flomo 笔记 + 高德天气 MCP 服务器
flomo Notes & AMap Weather MCP Server

提供以下工具/资源:
  - flomo 笔记写入 (write_note)
  - 高德天气查询 (get_weather)
  - 城市 adcode 查询 (search_city, get_city_info, city://{adcode} 资源)
  - 天气摘要提示词 (summarize_weather)

准备:
  1. 高德开放平台 (https://lbs.amap.com) 申请 Web 服务 Key
  2. flomo 设置 → API 中复制专属记录 API 地址
  3. 写入环境变量或 .env 文件

环境变量:
  GAODE_API_KEY  - 高德 Web 服务 Key (天气查询必需, 也可用 AMAP_API_KEY)
  FLOMO_API_URL  - flomo API 地址 (--flomo_api_url 参数优先)
  CITY_CSV_PATH  - 自定义 adcode 表路径 (默认使用内置 data/adcode_citycode.csv)
  LOG_LEVEL      - 日志级别 (默认: INFO)
  MCP_TRANSPORT  - stdio | http (默认: stdio)
  MCP_HOST       - HTTP 模式主机 (默认: 0.0.0.0)
  MCP_PORT       - HTTP 模式端口 (默认: 8000)
"""

import argparse
import logging
import os
import sys

# 项目根目录加入 Python 路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

import _helpers

load_dotenv()

logger = logging.getLogger(__name__)

# MCP 服务器
mcp = FastMCP(
    name="flomo-mcp",
    instructions="""
写 flomo 笔记、查询高德天气的 MCP 服务器。

## 使用顺序
1. 查询城市 adcode: search_city("杭州") → 例如 330106 (浙江省杭州市西湖区)
2. 查询天气: get_weather(adcode="330106")
3. 需要时用 summarize_weather 提示词总结天气，再用 write_note 记到 flomo

## 注意
- adcode 为 6 位行政区划代码，直辖市的区直接挂在直辖市下 (如 110101 = 北京市东城区)
- 搜索省或市时返回其下属区县，最多 100 条
- 天气查询需要 GAODE_API_KEY，写笔记需要 flomo API 地址
""",
)

# 工具注册
from tools.city import register_city_tools
from tools.weather import register_weather_tools
from tools.flomo import register_flomo_tools
from tools.prompts import register_prompts

register_city_tools(mcp)
register_weather_tools(mcp)
register_flomo_tools(mcp)
register_prompts(mcp)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="flomo-mcp", description="flomo + 高德天气 MCP 服务器")
    parser.add_argument("--flomo_api_url", default="", help="flomo API 地址 (覆盖 FLOMO_API_URL)")
    parser.add_argument(
        "--transport",
        choices=("stdio", "http"),
        default=os.getenv("MCP_TRANSPORT", "stdio").lower(),
    )
    parser.add_argument("--log-level", default=_helpers.LOG_LEVEL)
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    _helpers.setup_logging(args.log_level)

    if args.flomo_api_url:
        _helpers.FLOMO_API_URL = args.flomo_api_url
    if not _helpers.FLOMO_API_URL:
        logger.warning("flomo API 地址未设置，write_note 将不可用")

    if args.transport == "http":
        import uvicorn
        from starlette.applications import Starlette
        from starlette.routing import Mount
        from web_api import create_web_routes

        host = os.getenv("MCP_HOST", "0.0.0.0")
        port = int(os.getenv("MCP_PORT", "8000"))
        logger.info("HTTP 模式启动: %s:%d (MCP: /mcp, API: /api)", host, port)

        mcp_app = mcp.streamable_http_app()
        app = Starlette(
            routes=create_web_routes() + [Mount("/mcp", app=mcp_app)],
            lifespan=lambda _app: mcp.session_manager.run(),
        )
        uvicorn.run(app, host=host, port=port, log_level=args.log_level.lower())
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
