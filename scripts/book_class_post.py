#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json

import httpx
from httpx import ConnectError


def main() -> None:
    parser = argparse.ArgumentParser(description="Book a person into a class over HTTP")
    parser.add_argument("--base-url", default="http://127.0.0.1:8001")
    parser.add_argument("--class-id", default="class-hiit-mon")
    parser.add_argument("--person-id", default="member-1")
    parser.add_argument("--person-name", default="Alex Morgan")
    parser.add_argument("--waitlist-if-full", action="store_true")
    args = parser.parse_args()

    payload = {"person_id": args.person_id, "person_name": args.person_name}
    url = f"{args.base_url}/api/v1/classes/{args.class_id}/bookings"

    try:
        resp = httpx.post(url, json=payload, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn studiodesk.main:app --reload --port 8001")
        return

    print(resp.status_code)
    if resp.text:
        print(json.dumps(resp.json(), indent=2))

    if resp.status_code == 409 and args.waitlist_if_full:
        detail = resp.json().get("detail") or {}
        if detail.get("error") == "class_full":
            wait = httpx.post(f"{args.base_url}/api/v1/classes/{args.class_id}/waitlist", json=payload, timeout=10.0)
            print(wait.status_code, wait.text)


if __name__ == "__main__":
    main()
