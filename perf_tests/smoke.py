from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass
from typing import Any, Dict, List

import httpx

from runner import load_env
from utils import EnvConfig, utc_now_iso


@dataclass
class CheckResult:
    name: str
    ok: bool
    detail: str = ""


class SmokeSession:
    """Runs the CRUD and login checks against a live server."""

    def __init__(self, env: EnvConfig, client: httpx.AsyncClient) -> None:
        self.env = env
        self.client = client
        self.results: List[CheckResult] = []

    def _url(self, path: str) -> str:
        return f"{self.env.api_base_url}{path}"

    def check(self, name: str, ok: bool, detail: str = "") -> bool:
        self.results.append(CheckResult(name, bool(ok), detail))
        return bool(ok)

    def expect(self, name: str, r: httpx.Response, status_code: int, **fields: Any) -> bool:
        if r.status_code != status_code:
            return self.check(name, False, f"status {r.status_code} != {status_code}")
        body = r.json() if fields else None
        for key, want in fields.items():
            got = body.get(key) if isinstance(body, dict) else None
            if got != want:
                return self.check(name, False, f"{key}={got!r} != {want!r}")
        return self.check(name, True)

    async def run_login(self) -> None:
        r = await self.client.post(
            self._url("/api/login"),
            json={"username": self.env.username, "password": self.env.password},
        )
        if self.expect("login valid", r, 200, success=True, message="Login successful"):
            self.check("login user id", r.json()["user"].get("id") == 1)

        bad_bodies: List[Dict[str, Any]] = [
            {"username": "invaliduser", "password": self.env.password},
            {"username": self.env.username, "password": "invalidpass"},
            {"password": self.env.password},
            {"username": self.env.username},
            {"username": "", "password": ""},
        ]
        for i, body in enumerate(bad_bodies, start=1):
            r = await self.client.post(self._url("/api/login"), json=body)
            self.expect(f"login rejected #{i}", r, 401, success=False, message="Invalid credentials")

    async def run_items(self) -> None:
        r = await self.client.get(self._url("/api/items"))
        if self.expect("list items", r, 200):
            self.check("list is array", isinstance(r.json(), list))

        for label, body in (("empty", {"text": ""}), ("blank", {"text": "   "}), ("missing", {})):
            r = await self.client.post(self._url("/api/items"), json=body)
            self.expect(f"create rejected ({label})", r, 400, success=False, message="Todo text is required")

        text = f"smoke {utc_now_iso()}"
        r = await self.client.post(self._url("/api/items"), json={"text": text})
        if not self.expect("create item", r, 201, text=text, completed=False):
            return
        todo_id = r.json()["id"]

        r = await self.client.put(self._url(f"/api/items/{todo_id}"), json={"completed": True})
        self.expect("complete item", r, 200, id=todo_id, text=text, completed=True)

        r = await self.client.put(self._url(f"/api/items/{todo_id}"), json={"text": text + " (edited)"})
        self.expect("edit item", r, 200, text=text + " (edited)", completed=True)

        r = await self.client.put(self._url("/api/items/99999"), json={"text": "nope"})
        self.expect("update missing", r, 404, success=False, message="Todo not found")

        r = await self.client.delete(self._url(f"/api/items/{todo_id}"))
        if self.expect("delete item", r, 200, success=True, message="Todo deleted successfully"):
            self.check("deleted id", r.json()["deletedTodo"].get("id") == todo_id)

        r = await self.client.delete(self._url(f"/api/items/{todo_id}"))
        self.expect("delete twice", r, 404, success=False, message="Todo not found")

        r = await self.client.get(self._url("/api/items"))
        self.check("item gone", all(t["id"] != todo_id for t in r.json()))

    async def run(self) -> List[CheckResult]:
        await self.run_login()
        await self.run_items()
        return self.results


async def run_smoke(env: EnvConfig) -> List[CheckResult]:
    timeout = httpx.Timeout(env.request_timeout_sec)
    async with httpx.AsyncClient(headers=env.default_headers, timeout=timeout, verify=env.verify_tls) as client:
        return await SmokeSession(env, client).run()


def main() -> None:
    ap = argparse.ArgumentParser(description="Smoke-check a running todo API")
    ap.add_argument("--env", required=True)
    args = ap.parse_args()

    results = asyncio.run(run_smoke(load_env(args.env)))
    failed = [r for r in results if not r.ok]
    for r in results:
        mark = "PASS" if r.ok else "FAIL"
        print(f"{mark} {r.name}" + (f" ({r.detail})" if r.detail else ""))
    print(f"\n{len(results) - len(failed)}/{len(results)} checks passed")
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
