from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional

import httpx

from utils import TestSpec, utc_now_iso


@dataclass
class RequestResult:
    timestamp_utc: str
    status_code: int
    ok: bool
    latency_ms: float
    error_type: str
    todo_id: Optional[int] = None


async def _post_todo(client: httpx.AsyncClient, url: str, text: str) -> RequestResult:
    ts = utc_now_iso()
    loop = asyncio.get_running_loop()
    t0 = loop.time()
    try:
        r = await client.post(url, json={"text": text})
        latency_ms = (loop.time() - t0) * 1000.0
        ok = r.status_code == 201
        todo_id = int(r.json()["id"]) if ok else None
        return RequestResult(ts, r.status_code, ok, latency_ms, "none" if ok else "http_error", todo_id)
    except httpx.TimeoutException:
        latency_ms = (loop.time() - t0) * 1000.0
        return RequestResult(ts, 0, False, latency_ms, "timeout")
    except (httpx.HTTPError, ValueError, KeyError, TypeError):
        latency_ms = (loop.time() - t0) * 1000.0
        return RequestResult(ts, 0, False, latency_ms, "exception")


def normalize_schedule(spec: TestSpec) -> List[Dict[str, float]]:
    if spec.schedule:
        out: List[Dict[str, float]] = []
        for seg in spec.schedule:
            rate = max(float(seg.get("rate", 0)), 0.0)
            dur = max(float(seg.get("duration_sec", 0)), 0.0)
            out.append({"rate": rate, "duration_sec": dur})
        return out
    return [{"rate": float(spec.rate), "duration_sec": float(spec.duration_sec)}]


async def _run_segment(
    client: httpx.AsyncClient,
    url: str,
    text_prefix: str,
    rate: float,
    duration_sec: float,
    sem: asyncio.Semaphore,
    results: List[RequestResult],
) -> None:
    if duration_sec <= 0:
        return
    if rate <= 0:
        await asyncio.sleep(duration_sec)
        return

    total = int(round(rate * duration_sec))
    if total <= 0:
        await asyncio.sleep(duration_sec)
        return

    interval = 1.0 / rate
    loop = asyncio.get_running_loop()

    async def one_request(n: int) -> None:
        async with sem:
            res = await _post_todo(client, url, f"{text_prefix} {n}")
            results.append(res)

    start = loop.time()
    tasks: List[asyncio.Task] = []
    for i in range(total):
        delay = start + i * interval - loop.time()
        if delay > 0:
            await asyncio.sleep(delay)
        tasks.append(asyncio.create_task(one_request(i)))

    await asyncio.gather(*tasks, return_exceptions=True)


async def generate_load(client: httpx.AsyncClient, api_base_url: str, spec: TestSpec) -> List[RequestResult]:
    url = f"{api_base_url}/api/items"
    sem = asyncio.Semaphore(int(spec.concurrency))
    results: List[RequestResult] = []

    for seg in normalize_schedule(spec):
        await _run_segment(
            client=client,
            url=url,
            text_prefix=spec.text_prefix,
            rate=seg["rate"],
            duration_sec=seg["duration_sec"],
            sem=sem,
            results=results,
        )

    return results


async def delete_todos(client: httpx.AsyncClient, api_base_url: str, todo_ids: List[int]) -> int:
    deleted = 0
    for todo_id in todo_ids:
        r = await client.delete(f"{api_base_url}/api/items/{todo_id}")
        if r.status_code == 200:
            deleted += 1
    return deleted
