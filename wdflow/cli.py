"""Typer based command line entry points for wdflow."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import requests
import typer

from wdflow.by import By
from wdflow.config import DEFAULT_PROFILE, resolve_config
from wdflow.core.errors import WdflowError
from wdflow.core.logger import get_logger
from wdflow.core.paths import ensure_work_dirs

STATUS_TIMEOUT_SEC = 10.0

app = typer.Typer(help="Utility CLI for wdflow WebDriver sessions.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logging.getLogger().setLevel(level_value)
    logger.setLevel(level_value)


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("status")
def status(
    server_url: Optional[str] = typer.Option(None, "--server-url", help="Remote end URL (defaults to the profile's)."),
    profile: str = typer.Option(DEFAULT_PROFILE, "--profile", help="webdriver profile in profiles.yaml."),
) -> None:
    """Query the remote end's /status endpoint."""

    logger = get_logger()
    try:
        base = server_url or resolve_config(profile).server_url
    except WdflowError as exc:
        _fail(str(exc))
        return
    url = base.rstrip("/") + "/status"
    logger.debug("GET %s", url)
    try:
        response = requests.get(url, timeout=STATUS_TIMEOUT_SEC)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("Status request to %s failed: %s", url, exc)
        _fail(f"Remote end unreachable: {url} ({exc})")
        return

    value = payload.get("value", payload) if isinstance(payload, dict) else {}
    ready = bool(value.get("ready", False)) if isinstance(value, dict) else False
    message = value.get("message", "") if isinstance(value, dict) else ""
    typer.echo(f"ready={str(ready).lower()} message={message}")
    if not ready:
        raise typer.Exit(code=2)


@app.command("screenshot")
def screenshot(
    url: str = typer.Argument(..., help="Page to open."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="PNG file to write."),
    selector: Optional[str] = typer.Option(None, "--selector", help="CSS selector of a single element to capture."),
    profile: str = typer.Option(DEFAULT_PROFILE, "--profile", help="webdriver profile in profiles.yaml."),
) -> None:
    """Open URL and save a screenshot of the page or of one element."""

    target = output or ensure_work_dirs()["shot"] / "screenshot.png"
    try:
        with resolve_config(profile).connect() as driver:
            driver.get(url)
            if selector:
                driver.find_element(By.css(selector)).screenshot(target)
            else:
                driver.screenshot(target)
    except WdflowError as exc:
        _fail(str(exc))
        return
    typer.echo(str(target))


@app.command("text")
def text(
    url: str = typer.Argument(..., help="Page to open."),
    selector: str = typer.Argument(..., help="CSS selector of the element."),
    profile: str = typer.Option(DEFAULT_PROFILE, "--profile", help="webdriver profile in profiles.yaml."),
) -> None:
    """Print the visible text of the first element matching SELECTOR."""

    try:
        with resolve_config(profile).connect() as driver:
            driver.get(url)
            value = driver.find_element(By.css(selector)).text()
    except WdflowError as exc:
        _fail(str(exc))
        return
    typer.echo(value)


@app.command("script")
def script(
    url: str = typer.Argument(..., help="Page to open."),
    source: str = typer.Argument(..., help="JavaScript to run; use `return` to produce a value."),
    is_async: bool = typer.Option(False, "--async", help="Run as an asynchronous script."),
    profile: str = typer.Option(DEFAULT_PROFILE, "--profile", help="webdriver profile in profiles.yaml."),
) -> None:
    """Run a script on URL and print its return value as JSON."""

    try:
        with resolve_config(profile).connect() as driver:
            driver.get(url)
            if is_async:
                ret = driver.execute_async_script(source)
            else:
                ret = driver.execute_script(source)
    except WdflowError as exc:
        _fail(str(exc))
        return
    typer.echo(json.dumps(ret.value, ensure_ascii=False, indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
