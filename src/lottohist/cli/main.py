"""lottohist CLI — run the server, prepare the database, inspect histories.

Usage:
    lottohist serve --port 3000                  # Run the API with uvicorn
    lottohist init-db                            # Create tables on the configured DB
    lottohist gen-secret                         # Print a fresh signing secret
    lottohist login you@example.com              # Print a session token
    lottohist histories --limit 5                # Recent histories (LOTTOHIST_TOKEN)
"""

from __future__ import annotations

import asyncio
import json
import os
import secrets
import sys
from typing import Optional

import click
import httpx

DEFAULT_API_URL = "http://localhost:3000"


def _api_url() -> str:
    return os.environ.get("LOTTOHIST_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.Client:
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.Client(base_url=_api_url(), headers=headers, timeout=30.0)


def _fail(r: httpx.Response) -> None:
    """Print the API's error message and exit."""
    try:
        message = r.json().get("error", r.text)
    except ValueError:
        message = r.text
    click.secho(f"Error ({r.status_code}): {message}", fg="red", err=True)
    sys.exit(1)


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "-"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="lottohist", prog_name="lottohist")
def main():
    """lottohist — lottery computation history API."""


# ---------------------------------------------------------------------------
# Server-side commands
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default: LOTTOHIST_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Port (default: LOTTOHIST_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    from lottohist.config import settings

    uvicorn.run(
        "lottohist.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command("init-db")
def init_db():
    """Create the users and histories tables if missing."""
    from lottohist.config import settings
    from lottohist.db.engine import engine, init_models

    async def _init():
        await init_models()
        await engine.dispose()

    asyncio.run(_init())
    click.secho(f"Schema ready on {settings.database_url}", fg="green")


@main.command("gen-secret")
def gen_secret():
    """Print a random value for LOTTOHIST_JWT_SECRET."""
    click.echo(secrets.token_urlsafe(32))


# ---------------------------------------------------------------------------
# Client commands
# ---------------------------------------------------------------------------


@main.command()
@click.argument("email")
@click.password_option(confirmation_prompt=False)
def login(email: str, password: str):
    """Log in and print the session token."""
    with _client() as c:
        r = c.post("/api/login", json={"email": email, "password": password})
    if r.status_code != 200:
        _fail(r)
    click.echo(r.json()["token"])


@main.command()
@click.option("--token", envvar="LOTTOHIST_TOKEN", required=True, help="Session token")
@click.option("--limit", "-l", default=20, help="Max results")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def histories(token: str, limit: int, as_json: bool):
    """List your most recent histories."""
    with _client(token) as c:
        r = c.get("/api/histories", params={"limit": limit})
    if r.status_code != 200:
        _fail(r)

    rows = r.json()["histories"]
    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return
    if not rows:
        click.echo("No histories yet.")
        return

    click.secho(f"Histories ({len(rows)}):", bold=True)
    click.echo()
    _print_table(rows, [
        ("ID", "id", 6),
        ("Mode", "mode", 10),
        ("Top", "top_digits_mode", 6),
        ("Created", "created_at", 32),
    ])


if __name__ == "__main__":
    main()
