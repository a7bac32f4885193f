#!/usr/bin/env python3
"""
Partner-side script for submitting a signed transaction.

Usage:
    python submit_transaction.py FAKEGOOGLE FAKEPASSWORD1234 FG-00001 25000
    python submit_transaction.py FAKEGOOGLE FAKEPASSWORD1234 FG-00001 25000 --item i-1:Pen:2:10000 --item i-2:Ruler:1:5000
"""
import argparse
import base64
import json
import sys
from datetime import datetime, timezone

import requests

from partnerpay.services.signature_service import sign_transaction


def parse_item(value: str) -> dict:
    """Parse ref:name:qty:unitPrice into an item body."""
    try:
        ref, name, qty, unit_price = value.split(":")
        return {"partnerItemRef": ref, "name": name, "qty": int(qty), "unitPrice": int(unit_price)}
    except ValueError:
        raise argparse.ArgumentTypeError(f"Item must be ref:name:qty:unitPrice, got '{value}'")


def build_request(partner_key: str, password: str, ref_no: str, total_amount: int, items: list) -> dict:
    """Build a signed request body stamped with the current UTC time."""
    now = datetime.now(timezone.utc).replace(microsecond=0)
    encoded_password = base64.b64encode(password.encode("utf-8")).decode("ascii")

    body = {
        "partnerKey": partner_key,
        "partnerRefNo": ref_no,
        "partnerPassword": encoded_password,
        "totalAmount": total_amount,
        "timestamp": now.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "sig": sign_transaction(now, partner_key, ref_no, total_amount, encoded_password),
    }
    if items:
        body["items"] = items
    return body


def submit_transaction(url: str, body: dict) -> None:
    print(f"🔗 Posting to: {url}")
    print(f"📨 Ref: {body['partnerRefNo']}  Total: {body['totalAmount']}")
    print("=" * 70)

    try:
        response = requests.post(url, json=body, timeout=30)
    except requests.exceptions.Timeout:
        print("❌ Timeout - server took too long to respond")
        return
    except requests.exceptions.ConnectionError:
        print("❌ Connection error - is the server running?")
        return

    try:
        data = response.json()
    except ValueError:
        print(f"❌ Error: HTTP {response.status_code}")
        print(response.text)
        return

    if data.get("result") == 1:
        print("✅ Accepted")
        print(f"   Total:    {data.get('totalAmount')}")
        print(f"   Discount: {data.get('totalDiscount')}")
        print(f"   Final:    {data.get('finalAmount')}")
    else:
        print(f"❌ Rejected (HTTP {response.status_code}): {data.get('resultMessage')}")

    print("=" * 70)
    print(json.dumps(data, indent=2))


if __name__ == "__main__":
    arg_parser = argparse.ArgumentParser(description="Submit a signed partner transaction")
    arg_parser.add_argument("partner_key")
    arg_parser.add_argument("password", help="Plain partner password (base64-encoded before sending)")
    arg_parser.add_argument("ref_no")
    arg_parser.add_argument("total_amount", type=int, help="Total amount in cents")
    arg_parser.add_argument("--item", action="append", type=parse_item, default=[], dest="items")
    arg_parser.add_argument("--url", default="http://localhost:8000/api/submittrxmessage")
    args = arg_parser.parse_args()

    if args.total_amount <= 0:
        print("Total amount must be positive")
        sys.exit(1)

    submit_transaction(
        args.url,
        build_request(args.partner_key, args.password, args.ref_no, args.total_amount, args.items)
    )
