"""
flomo 笔记写入工具

flomo API: POST {"content": "..."} → https://flomoapp.com/iwh/<token>/<secret>/
API 地址来自 --flomo_api_url 命令行参数或 FLOMO_API_URL 环境变量。
"""

import logging

from mcp.server.fastmcp import FastMCP

import _helpers
from _helpers import FLOMO_MEMO_URL, _post_json

logger = logging.getLogger(__name__)


async def write_flomo_note(content: str, api_url: str = "", **kwargs) -> dict:
    """flomo 写入，成功时返回笔记链接"""
    api_url = api_url or _helpers.FLOMO_API_URL
    if not api_url:
        return {"error": "未设置 flomo API 地址 (--flomo_api_url 或 FLOMO_API_URL)"}

    if not content or not content.strip():
        return {"error": "笔记内容不能为空"}

    result = await _post_json(api_url, {"content": content}, **kwargs)
    if result is None:
        return {"error": "flomo API 请求失败 (超时或服务器错误)"}
    if not isinstance(result, dict):
        return {"error": f"flomo API 响应格式异常: {type(result).__name__}"}

    slug = (result.get("memo") or {}).get("slug")
    if not slug:
        return {"error": f"笔记写入失败: {result.get('message') or 'unknown error'}"}

    url = FLOMO_MEMO_URL.format(slug=slug)
    logger.info("flomo memo created: %s", slug)
    return {
        "message": f"write note success: view at: {url}",
        "url": url,
    }


def register_flomo_tools(mcp: FastMCP) -> None:
    """flomo 相关 MCP 工具注册"""

    @mcp.tool()
    async def write_note(content: str) -> dict:
        """
        写一条笔记到 flomo。

        Args:
            content: 笔记正文，支持 Markdown 格式。可以用 #标签 给笔记分类。

        Returns:
            {"message": "write note success: ...", "url": "https://v.flomoapp.com/mine/?memo_id=..."}
        """
        return await write_flomo_note(content)
