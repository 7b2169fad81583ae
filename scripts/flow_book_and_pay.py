#!/usr/bin/env python3
"""
Complete listing, payment and booking flow against a running server.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Usage:
    python scripts/set_role.py --email host@stayvista.com --role host --create
    python scripts/flow_book_and_pay.py
    python scripts/flow_book_and_pay.py --base-url http://localhost:5000 --price 120

Flow:
    1. Sign in as host and list a room
    2. Sign in as guest
    3. Create payment intent
    4. Save booking with the intent's transaction id
    5. Mark the room booked
    6. Show guest bookings, host bookings and stats
"""

import argparse
import json
import sys

import httpx

BASE_URL = "http://localhost:5000"

# Test identities
HOST_EMAIL = "host@stayvista.com"
GUEST_EMAIL = "guest@stayvista.com"


def sign_in(client: httpx.Client, email: str, name: str) -> None:
    """Register the user (idempotent) and store the session cookie on ``client``."""
    client.put("/user", json={"email": email, "name": name})
    response = client.post("/jwt", json={"email": email})
    if response.status_code != 200:
        print(f"ERROR: Sign-in failed for {email}: {response.status_code}")
        print(response.text)
        sys.exit(1)


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(response: httpx.Response, fields: list[str] | None = None):
    """Print result, optionally filtering fields."""
    data = response.json() if response.text else {}
    if response.status_code >= 400:
        print(f"ERROR ({response.status_code}): {json.dumps(data, indent=2)}")
        return False

    print(f"Status: {response.status_code}")
    if fields and isinstance(data, dict):
        data = {k: data.get(k) for k in fields if k in data}
    print(json.dumps(data, indent=2))
    return True


def main():
    parser = argparse.ArgumentParser(description="Complete booking and payment flow")
    parser.add_argument("--base-url", default=BASE_URL, help="API base URL")
    parser.add_argument("--price", type=float, default=100.0, help="Nightly price")
    parser.add_argument("--category", default="Beach", help="Room category")
    args = parser.parse_args()

    host = httpx.Client(base_url=args.base_url, timeout=10.0)
    guest = httpx.Client(base_url=args.base_url, timeout=10.0)

    # Step 1: Host lists a room
    print_step(1, "Sign in as host and list a room")
    sign_in(host, HOST_EMAIL, "Demo Host")
    room_result = host.post("/room", json={
        "title": "Sea view cabin",
        "location": "Cox's Bazar",
        "category": args.category,
        "price": args.price,
        "guests": 2,
        "bedrooms": 1,
        "bathrooms": 1,
        "hostName": "Demo Host",
    })
    if not print_result(room_result, ["id", "title", "price", "booked"]):
        print("Is the host promoted? Run scripts/set_role.py first.")
        sys.exit(1)
    room = room_result.json()

    # Step 2: Guest signs in
    print_step(2, "Sign in as guest")
    sign_in(guest, GUEST_EMAIL, "Demo Guest")
    print(f"Signed in as {GUEST_EMAIL}")

    # Step 3: Payment intent
    print_step(3, "Create payment intent")
    intent_result = guest.post("/create-payment-intent", json={"price": args.price})
    if not print_result(intent_result):
        sys.exit(1)
    client_secret = intent_result.json()["clientSecret"]
    transaction_id = client_secret.split("_secret_")[0]

    # Step 4: Booking
    print_step(4, "Save booking")
    booking_result = guest.post("/booking", json={
        "guest": {"name": "Demo Guest", "email": GUEST_EMAIL},
        "host": room["host"],
        "roomId": room["id"],
        "title": room["title"],
        "location": room["location"],
        "category": room["category"],
        "price": args.price,
        "transactionId": transaction_id,
    })
    if not print_result(booking_result, ["id", "roomId", "price", "transactionId"]):
        sys.exit(1)

    # Step 5: Availability
    print_step(5, "Mark room booked")
    status_result = guest.patch(f"/room/status/{room['id']}", json={"status": True})
    if not print_result(status_result, ["id", "booked"]):
        sys.exit(1)

    # Step 6: Views
    print_step(6, "Bookings and stats")
    print_result(guest.get(f"/my-bookings/{GUEST_EMAIL}"))
    print_result(host.get(f"/manage-bookings/{HOST_EMAIL}"))
    print_result(guest.get("/guest-stat"))
    print_result(host.get("/host-stat"))

    print(f"\n{'='*60}")
    print("FLOW COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
