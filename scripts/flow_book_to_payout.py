#!/usr/bin/env python3
"""
Booking lifecycle smoke script: request, accept, pay, complete, payout.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Tokens are minted locally with the configured JWT secret, since login is
owned by the auth service.

Usage:
    python scripts/flow_book_to_payout.py --property-id <UUID> --guest-id <UUID> --host-id <UUID> \
        --check-in 2026-04-01 --check-out 2026-04-29

Flow:
    1. Calculate booking price (guest)
    2. Create booking (guest)
    3. Accept booking (host)
    4. Report payment completed (payment gateway callback)
    5. Run completion sweep as of the day after checkout
    6. Request payout (host)
"""

import argparse
import json
import sys
from datetime import date, timedelta

import httpx

from nestquarter.config import settings
from nestquarter.core.security import create_access_token

BASE_URL = "http://localhost:8000"


def token_for(user_id: str) -> str:
    return create_access_token({"sub": user_id})


def api_request(method: str, endpoint: str, data: dict | None = None, headers: dict | None = None) -> dict:
    """Make an API request and return status and JSON body."""
    response = httpx.request(
        method,
        f"{BASE_URL}{settings.api_prefix}{endpoint}",
        json=data,
        headers=headers or {},
        timeout=10.0,
        follow_redirects=True,
    )
    return {"status": response.status_code, "data": response.json() if response.text else {}}


def as_user(user_id: str) -> dict:
    return {"Authorization": f"Bearer {token_for(user_id)}"}


def print_step(step: int, title: str):
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict, fields: list[str] | None = None) -> bool:
    """Print result, optionally filtering fields."""
    if result["status"] >= 400:
        print(f"ERROR ({result['status']}): {json.dumps(result['data'], indent=2)}")
        return False

    print(f"Status: {result['status']}")
    data = result["data"]
    if fields:
        data = {k: data.get(k) for k in fields if k in data}
    print(json.dumps(data, indent=2, default=str))
    return True


def main():
    parser = argparse.ArgumentParser(description="Booking to payout flow")
    parser.add_argument("--property-id", required=True)
    parser.add_argument("--guest-id", required=True)
    parser.add_argument("--host-id", required=True)
    parser.add_argument("--check-in", required=True, help="Check-in date (YYYY-MM-DD)")
    parser.add_argument("--check-out", required=True, help="Check-out date (YYYY-MM-DD)")
    parser.add_argument("--guests", type=int, default=1)
    args = parser.parse_args()

    stay = {
        "property_id": args.property_id,
        "check_in_date": args.check_in,
        "check_out_date": args.check_out,
        "guest_count": args.guests,
    }

    print_step(1, "Calculate booking price")
    calc_result = api_request("POST", "/bookings/calculate", stay, as_user(args.guest_id))
    if not print_result(calc_result) or not calc_result["data"].get("available"):
        sys.exit(1)

    print_step(2, "Create booking")
    booking_result = api_request("POST", "/bookings/", stay, as_user(args.guest_id))
    if not print_result(booking_result, ["id", "nights", "total_cents", "booking_status"]):
        sys.exit(1)
    booking_id = booking_result["data"]["id"]

    print_step(3, "Accept booking (as host)")
    accept_result = api_request("POST", f"/bookings/{booking_id}/accept", headers=as_user(args.host_id))
    if not print_result(accept_result, ["id", "booking_status", "confirmed_at"]):
        sys.exit(1)

    print_step(4, "Report payment completed")
    internal = {"X-Internal-Token": settings.internal_api_token}
    paid_result = api_request(
        "POST", f"/internal/bookings/{booking_id}/payment-status", {"payment_status": "completed"}, internal
    )
    if not print_result(paid_result, ["id", "payment_status"]):
        sys.exit(1)

    print_step(5, "Run completion sweep")
    sweep_day = date.fromisoformat(args.check_out) + timedelta(days=settings.booking_completion_grace_days)
    sweep_result = api_request("POST", f"/internal/bookings/complete-due?today={sweep_day}", headers=internal)
    if not print_result(sweep_result):
        sys.exit(1)

    print_step(6, "Request payout (as host)")
    payout_result = api_request("POST", "/payouts/request", {"booking_ids": [booking_id]}, as_user(args.host_id))
    if not print_result(payout_result, ["total_payouts", "total_amount_cents", "platform_fee_cents", "net_payout_cents", "scheduled_for"]):
        sys.exit(1)

    print("\n" + "="*60)
    print("FULL FLOW COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
