"""
通用配置与 HTTP 调用工具

高德开放平台 (restapi.amap.com) 与 flomo API 共用
"""

import logging
import os
import sys
import time
from typing import Any, Optional

import httpx
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# ── 配置 ─────────────────────────────────────────────────────────────────────
GAODE_API_KEY = os.getenv("GAODE_API_KEY", "") or os.getenv("AMAP_API_KEY", "")
FLOMO_API_URL = os.getenv("FLOMO_API_URL", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ── API 端点 ─────────────────────────────────────────────────────────────────
AMAP_BASE = "https://restapi.amap.com"
AMAP_WEATHER_URL = f"{AMAP_BASE}/v3/weather/weatherInfo"

FLOMO_MEMO_URL = "https://v.flomoapp.com/mine/?memo_id={slug}"


# ── 日志 ─────────────────────────────────────────────────────────────────────
def setup_logging(level: str = LOG_LEVEL) -> None:
    """
    日志统一输出到 stderr。
    stdio 模式下 stdout 是 MCP 协议通道，写入日志会破坏 JSON-RPC 消息。
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
        force=True,
    )


# ── HTTP 客户端 ──────────────────────────────────────────────────────────────
_TIMEOUT = httpx.Timeout(30.0)
_DEFAULT_HEADERS = {"User-Agent": "flomo-mcp/0.1"}


async def _request_json(
    method: str,
    url: str,
    *,
    params: Optional[dict] = None,
    payload: Optional[dict] = None,
    timeout: httpx.Timeout = _TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[Any]:
    """
    JSON 请求，失败 (超时 / 非 2xx / 网络错误 / 非 JSON 响应) 时返回 None。
    每次请求输出一行日志: 方法、URL、状态码、耗时。
    """
    start = time.monotonic()
    async with httpx.AsyncClient(timeout=timeout, headers=_DEFAULT_HEADERS, transport=transport) as client:
        try:
            resp = await client.request(method, url, params=params, json=payload)
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException as e:
            logger.error("HTTP %s %s timeout (%s) %.0fms", method, url, type(e).__name__, _elapsed_ms(start))
            return None
        except httpx.HTTPStatusError as e:
            logger.error(
                "HTTP %s %s status %d %.0fms", method, url, e.response.status_code, _elapsed_ms(start)
            )
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error("HTTP %s %s %s: %s %.0fms", method, url, type(e).__name__, e, _elapsed_ms(start))
            return None
    logger.info("HTTP %s %s status %d %.0fms", method, url, resp.status_code, _elapsed_ms(start))
    return data


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000


async def _fetch_json(url: str, params: dict, **kwargs) -> Optional[Any]:
    """GET → JSON"""
    return await _request_json("GET", url, params=params, **kwargs)


async def _post_json(url: str, payload: dict, **kwargs) -> Optional[Any]:
    """POST (JSON body) → JSON"""
    return await _request_json("POST", url, payload=payload, **kwargs)
