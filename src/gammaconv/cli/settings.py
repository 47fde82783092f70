"""Option defaults for the gammaconv CLI, loaded from / saved to JSON or CSV."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Any, Iterable

SETTINGS_DESTS = {"settings_path", "save_settings_path"}


def add_settings_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--settings",
        dest="settings_path",
        default=None,
        help="Load option defaults from a settings file (json or csv).",
    )
    parser.add_argument(
        "--save-settings",
        dest="save_settings_path",
        default=None,
        help="Save the effective option values to a settings file (json or csv).",
    )


def strip_settings_args(
    argv: Iterable[str],
) -> tuple[list[str], str | None, str | None]:
    """Remove --settings/--save-settings from argv and return their values."""
    cleaned: list[str] = []
    found: dict[str, str | None] = {"--settings": None, "--save-settings": None}

    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        flag, eq, value = arg.partition("=")
        if flag in found:
            if eq:
                found[flag] = value
                i += 1
                continue
            if i + 1 >= len(args):
                raise SystemExit(f"{flag} requires a path.")
            found[flag] = args[i + 1]
            i += 2
            continue
        cleaned.append(arg)
        i += 1

    return cleaned, found["--settings"], found["--save-settings"]


def detect_command(argv: Iterable[str]) -> str | None:
    for arg in argv:
        if not arg.startswith("-"):
            return arg
    return None


def _parse_csv_value(raw: str) -> Any:
    text = raw.strip()
    if text == "":
        return ""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _load_csv(path: Path) -> dict[str, Any]:
    data: dict[str, Any] = {}
    with path.open("r", newline="", encoding="utf-8") as handle:
        for row in csv.reader(handle):
            if not row or not row[0].strip():
                continue
            key = row[0].strip()
            # header row
            if key.lower() == "key" and len(row) > 1 and row[1].strip().lower() == "value":
                continue
            data[key] = _parse_csv_value(row[1]) if len(row) > 1 else ""
    return data


def _save_csv(path: Path, data: dict[str, Any]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["key", "value"])
        for key in sorted(data):
            writer.writerow([key, json.dumps(data[key], ensure_ascii=True)])


def load_settings(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise SystemExit(f"Settings file not found: {path}")
    if path.suffix.lower() == ".csv":
        return _load_csv(path)

    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise SystemExit(f"Invalid JSON in settings file {path}: {exc}") from exc
    if isinstance(data, dict):
        return data
    raise SystemExit(f"Settings file must be a JSON object: {path}")


def select_settings(data: dict[str, Any], command: str | None) -> dict[str, Any]:
    """
    Pick the section for ``command``.

    A file is either flat (``{"radius": 2}``) or sectioned per command with an
    optional ``"default"`` section used when the command has none.
    """
    if not isinstance(data, dict):
        return {}
    if command and isinstance(data.get(command), dict):
        return dict(data[command])
    if isinstance(data.get("default"), dict):
        return dict(data["default"])
    if all(not isinstance(v, dict) for v in data.values()):
        return dict(data)
    return {}


def save_settings(
    path: Path,
    settings: dict[str, Any],
    *,
    command: str | None = None,
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".csv":
        _save_csv(path, settings)
        return

    data: dict[str, Any] = {}
    if command:
        if path.exists():
            try:
                data = load_settings(path)
            except SystemExit:
                data = {}
        # Promote an existing flat file into the "default" section.
        if data and all(not isinstance(v, dict) for v in data.values()):
            data = {"default": data}
        data[command] = settings
    else:
        data = settings

    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=True)
        handle.write("\n")


def _option_actions(parser: argparse.ArgumentParser) -> list[argparse.Action]:
    return [a for a in parser._actions if a.option_strings and a.dest != argparse.SUPPRESS]


def apply_settings_to_parser(parser: argparse.ArgumentParser, settings: dict[str, Any]) -> None:
    """Use ``settings`` as option defaults; unknown keys are ignored."""
    for action in _option_actions(parser):
        if action.dest in settings and action.dest not in SETTINGS_DESTS:
            action.default = settings[action.dest]
            action.required = False


def serialize_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    *,
    exclude: set[str] | None = None,
) -> dict[str, Any]:
    skip = SETTINGS_DESTS | (exclude or set())
    out: dict[str, Any] = {}
    for action in _option_actions(parser):
        if action.dest in skip or isinstance(action, (argparse._HelpAction, argparse._VersionAction)):
            continue
        value = getattr(args, action.dest, None)
        out[action.dest] = str(value) if isinstance(value, Path) else value
    return out


def find_subparser(
    parser: argparse.ArgumentParser,
    command: str | None,
) -> argparse.ArgumentParser | None:
    if not command:
        return None
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return action.choices.get(command)
    return None
