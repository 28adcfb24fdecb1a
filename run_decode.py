from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from cart_decoder.decoder import decode, decode_file
from cart_decoder.domain import Shop

logger = logging.getLogger("run_decode")


def describe(shop: Shop) -> List[str]:
    cart = shop.cart
    lines = [
        f"amount: {cart.cost.total_amount.amount}",
        f"delivery groups: {len(cart.delivery_groups)}",
    ]
    for index, group in enumerate(cart.delivery_groups):
        address = group.delivery_address
        lines.append(
            f"  [{index}] {address.city}, {address.province_code}, "
            f"{address.country_code} {address.zip}"
        )
    lines.append(f"email: {cart.buyer_identity.customer.email}")
    return lines


def decode_one(name: str, quiet: bool) -> bool:
    try:
        result = decode(sys.stdin.buffer) if name == "-" else decode_file(name)
    except OSError as exc:
        logger.error("%s: cannot read: %s", name, exc)
        return False

    if result.is_left:
        error = result.value
        print(f"{name}: {error.kind}: {error}", file=sys.stderr)
        return False

    logger.info("%s: ok", name)
    if not quiet:
        print(f"=== {name} ===")
        print("\n".join(describe(result.value)))
    return True


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Decode cart JSON documents and print a summary.")
    p.add_argument("paths", nargs="*", default=["-"], help="JSON files; '-' or nothing reads stdin")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--quiet", action="store_true", help="Only report failures")
    args = p.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(message)s")

    results = [decode_one(name, args.quiet) for name in args.paths]
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
