"""
HTTP 模式下的 REST API 路由

与 MCP 服务同端口:
  GET /api/city?q={关键词}      → 城市 adcode 搜索
  GET /api/city/{adcode}        → adcode 精确查询
  GET /api/weather?adcode=...   → 高德天气
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from data.city_codes import get_city, search_city_code
from tools.weather import fetch_weather


async def api_city_search(request: Request) -> JSONResponse:
    """GET /api/city?q={关键词} (q 为空时返回全部, 最多 100 条)"""
    q = request.query_params.get("q", "")
    return JSONResponse(search_city_code(q))


async def api_city_detail(request: Request) -> JSONResponse:
    """GET /api/city/{adcode}"""
    adcode = request.path_params["adcode"]
    city = get_city(adcode)
    if city is None:
        return JSONResponse({"error": f"未找到 adcode 为 {adcode} 的城市"}, status_code=404)
    return JSONResponse({"name": city.name, "adcode": city.adcode, "citycode": city.citycode})


async def api_weather(request: Request) -> JSONResponse:
    """GET /api/weather?adcode=330106&extensions=base"""
    p = request.query_params
    adcode = p.get("adcode", "").strip()
    extensions = p.get("extensions", "base").strip().lower()
    if not adcode:
        return JSONResponse({"error": "需要 adcode 参数"}, status_code=400)
    result = await fetch_weather(adcode, extensions)
    status_code = 502 if "error" in result else 200
    return JSONResponse(result, status_code=status_code)


# ── 路由 ─────────────────────────────────────────────────────────────────────

def create_web_routes() -> list:
    return [
        Route("/api/city", api_city_search),
        Route("/api/city/{adcode}", api_city_detail),
        Route("/api/weather", api_weather),
    ]
