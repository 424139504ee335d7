"""AuthGate CLI — run the server, and talk to a running one.

Usage:
    authgate serve                               # Run the API with uvicorn
    authgate signup alice@example.com            # Register (prompts for password)
    authgate signin alice@example.com            # Sign in, print tokens
    authgate users --page 2 --limit 20           # List users
    authgate whois <user-id> --token <jwt>       # Fetch one user (needs a token)
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8080"


def _api_url() -> str:
    return os.environ.get("AUTHGATE_API_URL", DEFAULT_API_URL).rstrip("/")


def _api_prefix() -> str:
    return f"/api/{os.environ.get('API_VERSION', 'v1')}"


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the AuthGate server."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # No running loop: normal CLI invocation
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _check(r: httpx.Response) -> dict:
    """Return the JSON body, or print the server's error and exit 1."""
    try:
        body = r.json()
    except ValueError:
        body = {}
    if r.is_error:
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or r.reason_phrase
        click.secho(f"Error {r.status_code}: {message}", fg="red", err=True)
        for err in body.get("errors") or []:
            click.secho(f"  {err.get('field')}: {err.get('message')}", fg="red", err=True)
        sys.exit(1)
    return body


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k) or "-")[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="authgate", prog_name="authgate")
def main():
    """AuthGate — credential management and bearer-token authentication."""


# ---------------------------------------------------------------------------
# authgate serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default: HOST setting)")
@click.option("--port", type=int, default=None, help="Port (default: PORT setting)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes (dev only)")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    from authgate.config import settings

    uvicorn.run(
        "authgate.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# authgate signup / signin
# ---------------------------------------------------------------------------


@main.command()
@click.argument("email")
@click.password_option(help="Password (min 6 characters)")
def signup(email: str, password: str):
    """Register a new account for EMAIL."""
    _run(_signup_impl(email, password))


async def _signup_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post(
            f"{_api_prefix()}/auth/signup",
            json={"email": email, "password": password},
        )
        body = _check(r)
    user = body["user"]
    click.secho(f"Created user {user['email']} ({user['id']})", fg="green")


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, help="Account password")
@click.option("--json", "as_json", is_flag=True, help="Print the raw response")
def signin(email: str, password: str, as_json: bool):
    """Sign in as EMAIL and print the issued tokens."""
    _run(_signin_impl(email, password, as_json))


async def _signin_impl(email: str, password: str, as_json: bool):
    async with _client() as c:
        r = await c.post(
            f"{_api_prefix()}/auth/signin",
            json={"email": email, "password": password},
        )
        body = _check(r)
    if as_json:
        click.echo(_pretty_json(body))
        return
    click.secho(f"Signed in as {body['user']['email']}", fg="green")
    click.echo(f"Access token:  {body['token']}")
    click.echo(f"Refresh token: {body['refreshToken']}")


# ---------------------------------------------------------------------------
# authgate users / whois
# ---------------------------------------------------------------------------


@main.command()
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=10, show_default=True)
def users(page: int, limit: int):
    """List registered users, newest first."""
    _run(_users_impl(page, limit))


async def _users_impl(page: int, limit: int):
    async with _client() as c:
        r = await c.get(f"{_api_prefix()}/users", params={"page": page, "limit": limit})
        body = _check(r)
    _print_table(
        body["data"],
        [("ID", "id", 36), ("EMAIL", "email", 32), ("NAME", "name", 24)],
    )
    click.echo(
        f"\nPage {body['page']}/{body['totalPages']} · {body['total']} user(s)"
    )


@main.command()
@click.argument("user_id")
@click.option(
    "--token",
    envvar="AUTHGATE_TOKEN",
    required=True,
    help="Access token (or set AUTHGATE_TOKEN)",
)
def whois(user_id: str, token: str):
    """Show one user. Requires an access token."""
    _run(_whois_impl(user_id, token))


async def _whois_impl(user_id: str, token: str):
    async with _client() as c:
        r = await c.get(
            f"{_api_prefix()}/users/{user_id}",
            headers={"Authorization": f"Bearer {token}"},
        )
        body = _check(r)
    click.echo(_pretty_json(body))


if __name__ == "__main__":
    main()
