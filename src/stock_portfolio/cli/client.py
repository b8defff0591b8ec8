"""CLI to exercise a running stock_portfolio API.

Usage:
  poetry run stock-portfolio-cli health
  poetry run stock-portfolio-cli signup "Ada" ada@example.com secret investor
  poetry run stock-portfolio-cli --email ada@example.com --password secret portfolio add AAPL
  poetry run stock-portfolio-cli history AAPL --head 5

Commands that need a session (me, portfolio) log in first with --email and
--password; the session cookie is kept for the rest of the run.
"""
import argparse
import json
import os
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def _login(client: httpx.Client, args: argparse.Namespace) -> None:
    if not args.email or not args.password:
        raise SystemExit("This command needs --email and --password")
    r = client.post("/api/auth/login", json={"email": args.email, "password": args.password})
    r.raise_for_status()


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_signup(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {"name": args.name, "email": args.email_arg, "password": args.password_arg, "role": args.role}
    r = client.post("/api/auth/signup", json=body)
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_login(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.post("/api/auth/login", json={"email": args.email_arg, "password": args.password_arg})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_me(client: httpx.Client, args: argparse.Namespace) -> int:
    _login(client, args)
    r = client.get("/api/auth/me")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_portfolio_list(client: httpx.Client, args: argparse.Namespace) -> int:
    _login(client, args)
    r = client.get("/api/portfolio")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_portfolio_add(client: httpx.Client, args: argparse.Namespace) -> int:
    _login(client, args)
    r = client.post("/api/portfolio", json={"stockSymbol": args.symbol})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_portfolio_remove(client: httpx.Client, args: argparse.Namespace) -> int:
    _login(client, args)
    r = client.request("DELETE", "/api/portfolio", json={"stockSymbol": args.symbol})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_history(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/history", params={"symbol": args.symbol})
    r.raise_for_status()
    data = r.json()["history"]
    print(f"Found {len(data)} history points for {args.symbol}")
    print_json(data[: args.head] if args.head else data)
    return 0


def cmd_summary(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.post("/api/gemini-summary", json={"symbol": args.symbol})
    r.raise_for_status()
    print(r.json()["summary"])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exercise the stock_portfolio API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--email",
        default=os.getenv("STOCK_PORTFOLIO_EMAIL"),
        help="Login email for session commands (env: STOCK_PORTFOLIO_EMAIL)",
    )
    parser.add_argument(
        "--password",
        default=os.getenv("STOCK_PORTFOLIO_PASSWORD"),
        help="Login password for session commands (env: STOCK_PORTFOLIO_PASSWORD)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET / health check")

    p = subparsers.add_parser("signup", help="POST /api/auth/signup")
    p.add_argument("name")
    p.add_argument("email_arg", metavar="email")
    p.add_argument("password_arg", metavar="password")
    p.add_argument("role", choices=["investor", "analyst", "admin"])

    p = subparsers.add_parser("login", help="POST /api/auth/login")
    p.add_argument("email_arg", metavar="email")
    p.add_argument("password_arg", metavar="password")

    subparsers.add_parser("me", help="GET /api/auth/me")

    portfolio = subparsers.add_parser("portfolio", help="Portfolio routes (/api/portfolio)")
    portfolio_sub = portfolio.add_subparsers(dest="portfolio_cmd", required=True)
    portfolio_sub.add_parser("list", help="GET /api/portfolio")
    p = portfolio_sub.add_parser("add", help="POST /api/portfolio")
    p.add_argument("symbol", help="Ticker (e.g. AAPL)")
    p = portfolio_sub.add_parser("remove", help="DELETE /api/portfolio")
    p.add_argument("symbol", help="Ticker (e.g. AAPL)")

    p = subparsers.add_parser("history", help="GET /api/history")
    p.add_argument("symbol", help="Ticker")
    p.add_argument("--head", type=int, default=0, help="Show only first N points (0 = all)")

    p = subparsers.add_parser("summary", help="POST /api/gemini-summary")
    p.add_argument("symbol", help="Ticker")
    return parser


HANDLERS = {
    "health": cmd_health,
    "signup": cmd_signup,
    "login": cmd_login,
    "me": cmd_me,
    "portfolio": {
        "list": cmd_portfolio_list,
        "add": cmd_portfolio_add,
        "remove": cmd_portfolio_remove,
    },
    "history": cmd_history,
    "summary": cmd_summary,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    base_url = args.base_url.rstrip("/")

    handler = HANDLERS[args.command]
    if isinstance(handler, dict):
        handler = handler[args.portfolio_cmd]

    try:
        with httpx.Client(base_url=base_url, timeout=args.timeout) as client:
            return handler(client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
