#!/usr/bin/env python3
"""
whisper-paste – Spracheingabe per Tastenkürzel, eingefügt in jede App.

Hotkey drücken → sprechen → Hotkey drücken → Text wird transkribiert
und in die aktive Anwendung eingefügt.

Usage:
    whisper-paste                  # Daemon starten (Ctrl+C beendet)
    whisper-paste --setup          # API-Key interaktiv speichern
    whisper-paste --api-key KEY    # API-Key direkt speichern
    whisper-paste --hotkey f19     # Anderen Hotkey verwenden
"""

import logging
from typing import Annotated

import typer

from config import DEFAULT_HOTKEY, DEFAULT_MODEL
from utils.env import load_environment
from utils.logging import error, log, setup_logging
from utils.preferences import (
    ConfigError,
    config_path,
    get_saved_api_key,
    load_config,
    mask_api_key,
    save_api_key,
)

logger = logging.getLogger("whisper_paste")

# Typer-App
app = typer.Typer(
    help="Spracheingabe per Hotkey – transkribiert und fügt ein",
    add_completion=False,
)


# =============================================================================
# Setup
# =============================================================================


def setup_interactive() -> None:
    """Fragt den API-Key ab und speichert ihn in config.toml."""
    path = config_path()
    typer.echo("whisper-paste setup")
    typer.echo("-------------------")
    typer.echo(f"Config: {path}")
    typer.echo("")

    existing = get_saved_api_key(path)
    if existing:
        typer.echo(f"Vorhandener API-Key: {mask_api_key(existing)}")
        if not typer.confirm("Ersetzen?", default=False):
            typer.echo("Key bleibt unverändert.")
            return

    key = typer.prompt("OpenAI API-Key", default="", show_default=False).strip()
    if not key:
        error("Kein Key eingegeben. Abbruch.")
        raise typer.Exit(1)

    save_api_key(key, path)
    typer.echo(f"API-Key gespeichert: {path}")
    typer.echo("")
    typer.echo("Fertig! Starten mit `whisper-paste`.")


# =============================================================================
# Daemon
# =============================================================================


def run_daemon(hotkey: str, model: str, api_key: str) -> None:
    """Verdrahtet State, Controller und Hotkey-Monitor; blockiert bis Ctrl+C."""
    from paste_daemon import SessionController
    from providers import get_provider
    from utils.state import SharedSessionState
    from whisper_platform import get_hotkey_monitor, get_paster

    state = SharedSessionState()
    controller = SessionController(
        state,
        provider=get_provider("openai", api_key=api_key),
        paster=get_paster(),
        model=model,
    )
    monitor = get_hotkey_monitor(hotkey, controller.toggle)

    logger.info(f"Daemon gestartet: hotkey={monitor.combo}, model={model}")
    log("🎤 whisper-paste läuft")
    log(f"   Hotkey: {monitor.combo}")
    log(f"   Modell: {model}")
    log("   Beenden mit Ctrl+C")

    try:
        monitor.run()
    except KeyboardInterrupt:
        monitor.stop()
        state.request_stop()
        log("\n👋 whisper-paste beendet")


@app.command()
def main(
    setup: Annotated[
        bool,
        typer.Option("--setup", help="Interaktives Setup (API-Key speichern)"),
    ] = False,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="API-Key direkt speichern"),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option(
            help=f"Transkriptions-Modell (CLI > ENV > config.toml > {DEFAULT_MODEL})",
            envvar="WHISPER_PASTE_MODEL",
        ),
    ] = None,
    hotkey: Annotated[
        str | None,
        typer.Option(
            help=f"Tastenkombination (default: {DEFAULT_HOTKEY})",
            envvar="WHISPER_PASTE_HOTKEY",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(help="Debug-Logging aktivieren"),
    ] = False,
) -> None:
    """Spracheingabe per Hotkey: aufnehmen, transkribieren, einfügen.

    Beispiele:
        whisper-paste
        whisper-paste --hotkey ctrl+alt+space --model gpt-4o-transcribe
        whisper-paste --api-key sk-...
    """
    load_environment()
    setup_logging(debug=debug)

    if setup:
        setup_interactive()
        return

    if api_key is not None:
        if not api_key.strip():
            error("Leerer API-Key")
            raise typer.Exit(1)
        path = save_api_key(api_key.strip())
        typer.echo(f"API-Key gespeichert: {path}")
        typer.echo("Starten mit `whisper-paste`.")
        return

    try:
        cfg = load_config()
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)

    try:
        run_daemon(
            hotkey=hotkey or cfg.hotkey,
            model=model or cfg.model,
            api_key=cfg.api_key,
        )
    except ValueError as e:
        # z.B. ungültiger Hotkey
        error(f"Konfigurationsfehler: {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
