"""
Container health probe for the directory API.

Exits 0 only when /health answers with a successful response envelope.
"""

from __future__ import annotations

import os

import requests


def main() -> int:
    port = os.getenv("PORT", "8000")
    path = os.getenv("HEALTHCHECK_PATH", "/health")

    try:
        response = requests.get(f"http://127.0.0.1:{port}{path}", timeout=2)
        body = response.json()
    except (requests.RequestException, ValueError):
        return 1

    if not response.ok or not isinstance(body, dict):
        return 1
    header = body.get("header")
    return 0 if isinstance(header, dict) and header.get("success") is True else 1


if __name__ == "__main__":
    raise SystemExit(main())
