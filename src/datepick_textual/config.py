"""Configuration resolution for datepick-textual.

Priority order (highest to lowest):
1. Command-line flags of the demo (--wheels, --12h, --seconds)
2. ~/.config/datepick-textual/config.toml -> [date], [time], [wheel] sections
3. Built-in defaults (calendar grid for dates, wheels for times, 24h, no seconds)
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from datetime import date, time
from pathlib import Path

from datepick_textual.errors import ConfigError
from datepick_textual.models import (
    DATE_MASK,
    DateValue,
    DismissPolicy,
    MaskConfig,
    MaskKind,
    TimeValue,
    Value,
)
from datepick_textual.wheel import WheelTiming

_CONFIG_PATH = Path.home() / ".config" / "datepick-textual" / "config.toml"

_OVERLAYS = ("grid", "wheels")


@dataclass
class PickerSettings:
    """Everything a picker widget needs besides its timers.

    Grid overlays default to committing the last click on dismiss, wheel
    overlays to discarding the draft.
    """

    config: MaskConfig
    uses_wheels: bool = False
    dismiss_policy: DismissPolicy | None = None
    fallback: Value | None = None

    def __post_init__(self) -> None:
        if self.dismiss_policy is None:
            self.dismiss_policy = (
                DismissPolicy.DISCARD if self.uses_wheels else DismissPolicy.COMMIT_SELECTION
            )


@dataclass
class DemoSettings:
    """Resolved settings for the demo application."""

    date: PickerSettings
    time: PickerSettings
    timing: WheelTiming = field(default_factory=WheelTiming)
    initial_date: DateValue | None = None
    initial_time: TimeValue | None = None


def _load_config_dict() -> dict:
    """Load the full config.toml as a dict, or return empty dict on failure."""
    if not _CONFIG_PATH.exists():
        return {}
    try:
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except Exception:
        return {}


def _section(name: str) -> dict:
    """Return one table of config.toml, or an empty dict."""
    section = _load_config_dict().get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _get_bool(section: dict, key: str, where: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{where}.{key} must be true or false, got {value!r}")
    return value


def _get_overlay(section: dict, where: str, default: str) -> bool:
    """Return True if the section asks for wheels."""
    overlay = section.get("overlay", default)
    if overlay not in _OVERLAYS:
        raise ConfigError(f"{where}.overlay must be 'grid' or 'wheels', got {overlay!r}")
    return overlay == "wheels"


def _get_dismiss(section: dict, where: str) -> DismissPolicy | None:
    raw = section.get("dismiss")
    if raw is None:
        return None
    try:
        return DismissPolicy(raw)
    except ValueError:
        raise ConfigError(f"{where}.dismiss must be 'discard' or 'commit', got {raw!r}")


def _get_millis(section: dict, key: str, default: float) -> float:
    raw = section.get(key, default * 1000)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or raw < 0:
        raise ConfigError(f"wheel.{key} must be a non-negative number, got {raw!r}")
    return raw / 1000


def parse_date_value(text: str) -> DateValue:
    """Parse an ISO ``YYYY-MM-DD`` date from configuration or the command line.

    Raises:
        ConfigError: If the text is not a valid ISO date.
    """
    try:
        return DateValue.from_date(date.fromisoformat(text))
    except (TypeError, ValueError):
        raise ConfigError(f"invalid date {text!r}, expected YYYY-MM-DD")


def parse_time_value(text: str, config: MaskConfig) -> TimeValue:
    """Parse a 24-hour ``HH:MM[:SS]`` time shaped for *config*.

    Raises:
        ConfigError: If the text is not a valid time.
    """
    try:
        return TimeValue.from_time(time.fromisoformat(text), config)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid time {text!r}, expected HH:MM or HH:MM:SS")


def load_picker_settings(kind: MaskKind) -> PickerSettings:
    """Load the settings of the date or time picker from config.toml.

    Example config.toml::

        [date]
        overlay = "grid"
        dismiss = "commit"
        fallback = "2024-01-01"

        [time]
        overlay = "wheels"
        twelve_hour = true
        seconds = false

    Args:
        kind: Which picker to load.

    Returns:
        The picker settings, with defaults for missing keys.

    Raises:
        ConfigError: If a key holds an invalid value.
    """
    where = kind.value
    section = _section(where)
    if kind is MaskKind.DATE:
        config = DATE_MASK
        uses_wheels = _get_overlay(section, where, "grid")
    else:
        config = MaskConfig(
            MaskKind.TIME,
            uses_12h=_get_bool(section, "twelve_hour", where, False),
            has_seconds=_get_bool(section, "seconds", where, False),
        )
        uses_wheels = _get_overlay(section, where, "wheels")

    fallback: Value | None = None
    raw_fallback = section.get("fallback")
    if raw_fallback is not None:
        if kind is MaskKind.DATE:
            fallback = parse_date_value(str(raw_fallback))
        else:
            fallback = parse_time_value(str(raw_fallback), config)

    return PickerSettings(
        config=config,
        uses_wheels=uses_wheels,
        dismiss_policy=_get_dismiss(section, where),
        fallback=fallback,
    )


def load_wheel_timing() -> WheelTiming:
    """Load the wheel debounce and grace period from the ``[wheel]`` section.

    Returns:
        The timing, defaulting to a 150 ms debounce and a 500 ms grace period.

    Raises:
        ConfigError: If a value is not a non-negative number.
    """
    section = _section("wheel")
    defaults = WheelTiming()
    return WheelTiming(
        debounce=_get_millis(section, "debounce_ms", defaults.debounce),
        grace=_get_millis(section, "grace_ms", defaults.grace),
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed namespace with 'wheels', 'twelve_hour', 'seconds', 'date' and
        'time' attributes.
    """
    parser = argparse.ArgumentParser(
        prog="datepick-textual",
        description="Try out the masked date and time pickers in the terminal.",
    )
    parser.add_argument(
        "--wheels",
        action="store_true",
        help="Use scroll wheels for the date picker instead of a calendar.",
    )
    parser.add_argument(
        "--12h",
        dest="twelve_hour",
        action="store_true",
        help="Use a 12-hour clock with AM/PM.",
    )
    parser.add_argument(
        "--seconds",
        action="store_true",
        help="Include seconds in the time picker.",
    )
    parser.add_argument("--date", help="Initial date (YYYY-MM-DD).", default=None)
    parser.add_argument("--time", help="Initial time (HH:MM[:SS]).", default=None)
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> DemoSettings:
    """Merge command-line flags over config.toml.

    Args:
        args: Namespace from :func:`parse_args`.

    Returns:
        The resolved demo settings.

    Raises:
        SystemExit: If a setting is invalid.
    """
    try:
        date_settings = load_picker_settings(MaskKind.DATE)
        time_settings = load_picker_settings(MaskKind.TIME)
        timing = load_wheel_timing()

        if args.wheels:
            date_settings = PickerSettings(
                config=date_settings.config,
                uses_wheels=True,
                dismiss_policy=_get_dismiss(_section("date"), "date"),
                fallback=date_settings.fallback,
            )
        if args.twelve_hour or args.seconds:
            config = MaskConfig(
                MaskKind.TIME,
                uses_12h=args.twelve_hour or time_settings.config.uses_12h,
                has_seconds=args.seconds or time_settings.config.has_seconds,
            )
            fallback = time_settings.fallback
            if fallback is not None:
                fallback = TimeValue.from_time(fallback.to_time(), config)
            time_settings = PickerSettings(
                config=config,
                uses_wheels=time_settings.uses_wheels,
                dismiss_policy=time_settings.dismiss_policy,
                fallback=fallback,
            )

        initial_date = parse_date_value(args.date) if args.date else None
        initial_time = (
            parse_time_value(args.time, time_settings.config) if args.time else None
        )
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    return DemoSettings(
        date=date_settings,
        time=time_settings,
        timing=timing,
        initial_date=initial_date,
        initial_time=initial_time,
    )
