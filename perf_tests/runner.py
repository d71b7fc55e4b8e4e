from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import yaml

from loadgen import delete_todos, generate_load
from report import compute_http_report, diff_snapshots
from snapshots import health_checks, snapshot_items
from utils import (
    EnvConfig,
    TestSpec,
    ensure_dir,
    folder_name_for_test,
    today_ymd_utc,
    utc_now_iso,
    write_csv,
    write_json,
)


def load_env(path: str) -> EnvConfig:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return EnvConfig(
        project_name=str(data["project_name"]),
        api_base_url=str(data["api_base_url"]).rstrip("/"),
        default_headers=(data.get("default_headers") or {}),
        request_timeout_sec=float(data.get("request_timeout_sec", 10)),
        verify_tls=bool(data.get("verify_tls", True)),
        username=str(data.get("username", "testuser")),
        password=str(data.get("password", "testpass")),
    )


def parse_matrix(data: Dict[str, Any]) -> List[TestSpec]:
    raw_tests = data.get("tests") or []
    if not isinstance(raw_tests, list):
        raise SystemExit("test matrix must contain a top-level key 'tests' with a list")

    out: List[TestSpec] = []
    for t in raw_tests:
        test_id = str(t.get("test_id", ""))
        schedule = t.get("schedule", None)

        if schedule is not None:
            if not isinstance(schedule, list):
                raise SystemExit(f"Invalid 'schedule' in test {test_id}: must be a list")
            duration_sec = int(sum(int(seg.get("duration_sec", 0)) for seg in schedule))
            rate = float(schedule[0].get("rate", 0)) if schedule else 0.0
        else:
            try:
                rate = float(t["rate"])
                duration_sec = int(t["duration_sec"])
            except KeyError as e:
                raise SystemExit(f"Missing required key {e} in test {test_id}") from e

        out.append(
            TestSpec(
                test_id=test_id,
                rate=rate,
                duration_sec=duration_sec,
                concurrency=int(t.get("concurrency", 10)),
                text_prefix=str(t.get("text_prefix", "load")),
                schedule=schedule,
            )
        )

    return out


def load_matrix(path: str) -> List[TestSpec]:
    return parse_matrix(yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {})


def select_tests(all_tests: List[TestSpec], test_id: Optional[str], run_all: bool) -> List[TestSpec]:
    if test_id:
        sel = [t for t in all_tests if t.test_id == test_id]
        if not sel:
            raise SystemExit(f"Unknown test_id: {test_id}")
        return sel
    if run_all:
        return all_tests
    raise SystemExit("Provide --test-id or --all")


async def run_one(env: EnvConfig, spec: TestSpec, base_results: Path, cleanup: bool) -> Path:
    run_dir = base_results / today_ymd_utc() / folder_name_for_test(spec)
    ensure_dir(run_dir)

    start_time = utc_now_iso()

    timeout = httpx.Timeout(env.request_timeout_sec)
    async with httpx.AsyncClient(headers=env.default_headers, timeout=timeout, verify=env.verify_tls) as client:
        meta: Dict[str, Any] = {
            "project_name": env.project_name,
            "test_id": spec.test_id,
            "rate": spec.rate,
            "duration_sec": spec.duration_sec,
            "concurrency": spec.concurrency,
            "schedule": spec.schedule,
            "api_base_url": env.api_base_url,
            "start_time_utc": start_time,
            "end_time_utc": None,
        }
        write_json(run_dir / "meta.json", meta)
        write_json(run_dir / "health.json", await health_checks(env, client))

        before = await snapshot_items(env, client)

        load_start = utc_now_iso()
        req_results = await generate_load(client, env.api_base_url, spec)
        load_end = utc_now_iso()

        rows = [
            {
                "timestamp_utc": r.timestamp_utc,
                "status_code": r.status_code,
                "ok": str(bool(r.ok)),
                "latency_ms": f"{r.latency_ms:.3f}",
                "error_type": r.error_type,
                "todo_id": "" if r.todo_id is None else r.todo_id,
            }
            for r in req_results
        ]
        write_csv(
            run_dir / "request_results.csv",
            rows,
            fieldnames=["timestamp_utc", "status_code", "ok", "latency_ms", "error_type", "todo_id"],
        )

        after = await snapshot_items(env, client)
        created_ids = [r.todo_id for r in req_results if r.todo_id is not None]

        deleted = None
        if cleanup:
            deleted = await delete_todos(client, env.api_base_url, created_ids)

        end_time = utc_now_iso()
        meta["end_time_utc"] = end_time
        meta["load_window_utc"] = {"load_start": load_start, "load_end": load_end}
        write_json(run_dir / "meta.json", meta)

        http_rep = compute_http_report(
            [r.latency_ms for r in req_results],
            [r.ok for r in req_results],
            spec.duration_sec,
        )
        items_rep = diff_snapshots(before, after, created_ids)
        items_rep["cleanup_deleted"] = deleted

        write_json(run_dir / "report.json", {"http": http_rep, "items_diff": items_rep})

    print(f"\nRESULT_DIR: {run_dir}")
    print(f"TIME_UTC: {start_time} -> {end_time}")
    print(f"HTTP: error_rate={http_rep['error_rate']:.4f}, p95_ms={http_rep['p95_latency_ms']}, achieved_rps={http_rep['achieved_rps']}")
    print(f"ITEMS: delta_total={items_rep['delta_total']}, ids_monotonic={items_rep['ids_monotonic']}")
    return run_dir


def main() -> None:
    ap = argparse.ArgumentParser(description="Load-test the todo API")
    ap.add_argument("--env", required=True)
    ap.add_argument("--matrix", required=True)
    ap.add_argument("--test-id", default=None)
    ap.add_argument("--all", action="store_true")
    ap.add_argument("--cleanup", action="store_true", help="delete the todos created by the run")
    args = ap.parse_args()

    env = load_env(args.env)
    selected = select_tests(load_matrix(args.matrix), args.test_id, args.all)

    base_results = Path(__file__).parent / "results"
    ensure_dir(base_results)

    for spec in selected:
        asyncio.run(run_one(env, spec, base_results, args.cleanup))


if __name__ == "__main__":
    main()
