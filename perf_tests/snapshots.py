from __future__ import annotations

from typing import Any, Dict, List

import httpx

from utils import EnvConfig


async def get_json(client: httpx.AsyncClient, url: str) -> Any:
    r = await client.get(url)
    r.raise_for_status()
    return r.json()


def summarize_items(items: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "total": len(items),
        "completed": sum(1 for t in items if t.get("completed")),
        "max_id": max((int(t["id"]) for t in items), default=None),
    }


async def snapshot_items(env: EnvConfig, client: httpx.AsyncClient) -> Dict[str, Any]:
    items = await get_json(client, f"{env.api_base_url}/api/items")
    return summarize_items(items)


async def health_checks(env: EnvConfig, client: httpx.AsyncClient) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    try:
        out["health"] = await get_json(client, f"{env.api_base_url}/health")
    except httpx.HTTPError as e:
        out["health_error"] = str(e)
    try:
        out["api_test"] = await get_json(client, f"{env.api_base_url}/api/test")
    except httpx.HTTPError as e:
        out["api_test_error"] = str(e)
    return out
