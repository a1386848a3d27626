# -*- coding: utf-8 -*-
"""Send a test event to a running bridge and print the response and health.

Usage: jagoan-send-test-event [amount] [type]
    jagoan-send-test-event 50000 OUTGOING
    jagoan-send-test-event 100000 INCOMING   (acknowledged but ignored)

Target: $JAGOAN_URL (default http://localhost:3000).
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from typing import Any

import aiohttp

DEFAULT_URL = "http://localhost:3000"


def build_payload(argv: list[str]) -> dict[str, Any]:
    """Parse [amount] [type] into a webhook body."""
    raw_amount = argv[0] if argv else "10000"
    direction = argv[1] if len(argv) > 1 else "OUTGOING"
    amount: int | float = float(raw_amount) if "." in raw_amount else int(raw_amount)
    return {"amount": amount, "type": direction.upper()}


async def send(base_url: str, payload: dict[str, Any]) -> tuple[int, Any, Any]:
    timeout = aiohttp.ClientTimeout(total=15)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.post(f"{base_url}/webhook/transaction", json=payload) as response:
            status = response.status
            body = await response.json(content_type=None)
        async with session.get(f"{base_url}/health") as response:
            health = await response.json(content_type=None)
    return status, body, health


def main() -> None:
    base_url = os.environ.get("JAGOAN_URL", DEFAULT_URL).rstrip("/")
    try:
        payload = build_payload(sys.argv[1:])
    except ValueError:
        print("Usage: jagoan-send-test-event [amount] [type]", file=sys.stderr)
        sys.exit(2)
    print(f"POST {base_url}/webhook/transaction {json.dumps(payload)}")
    try:
        status, body, health = asyncio.run(send(base_url, payload))
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        print(f"Request failed: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Response (HTTP {status}):\n{json.dumps(body, indent=2)}")
    print(f"Health:\n{json.dumps(health, indent=2)}")
    sys.exit(0 if status == 200 else 1)


if __name__ == "__main__":
    main()
