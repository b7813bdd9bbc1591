"""Generate fresh signing secrets for access and refresh tokens."""

from __future__ import annotations

import argparse
import secrets


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print new token secrets in .env format")
    parser.add_argument(
        "--bytes",
        type=int,
        default=64,
        help="Number of random bytes per secret (default: 64)",
    )
    return parser.parse_args(argv)


def generate_secrets(nbytes: int = 64) -> dict[str, str]:
    # Two independent values: leaking one must not compromise the other token class
    return {
        "ACCESS_TOKEN_SECRET": secrets.token_hex(nbytes),
        "REFRESH_TOKEN_SECRET": secrets.token_hex(nbytes),
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(list(argv) if argv is not None else None)
    if args.bytes < 32:
        print("Refusing to generate secrets shorter than 32 bytes")
        return 1
    for key, value in generate_secrets(args.bytes).items():
        print(f"{key}={value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
