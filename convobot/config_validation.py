#!/usr/bin/env python3
"""
Configuration validation for Convo Bot config.ini.

Checks required sections, API keys and numeric limits, and flags
non-standard section names (e.g. RateLimit instead of Rate_Limit). Can be run
standalone via validate_config.py or at bot startup with --validate-config.
"""

import configparser
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .security_utils import validate_api_key_format

# Severity levels for validation results
SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"

# Canonical non-command section names (as used in config.ini.example and code)
CANONICAL_NON_COMMAND_SECTIONS = frozenset({
    "Bot",
    "Rate_Limit",
    "Cooldowns",
    "Api_Keys",
    "Logging",
    "Transport",
})

# Sections required for the bot to start
REQUIRED_SECTIONS = frozenset({
    "Bot",
})

# API key option -> the command that cannot work without it
API_KEY_USERS = {
    "gemini": "/ai",
    "youtube": "/yt",
    "odds": "/sports odds",
}

# (section, option) pairs that must be positive numbers
POSITIVE_NUMBERS = (
    ("Bot", "request_timeout"),
    ("Rate_Limit", "max_requests"),
    ("Rate_Limit", "period_seconds"),
    ("AI_Command", "max_prompt_length"),
    ("AI_Command", "max_words"),
    ("Sports_Command", "max_games"),
)

# Non-standard section name -> suggested canonical name (exact match)
SECTION_TYPO_MAP = {
    "RateLimit": "Rate_Limit",
    "Rate_Limits": "Rate_Limit",
    "Cooldown": "Cooldowns",
    "ApiKeys": "Api_Keys",
    "API_Keys": "Api_Keys",
    "Keys": "Api_Keys",
    "Log": "Logging",
}

# Fallback when no example config is available to discover command sections from
DEFAULT_COMMAND_SECTIONS = ("AI_Command", "YT_Command", "Sports_Command", "Commands_Command")


def strip_optional_quotes(s: str) -> str:
    """Strip one layer of surrounding double or single quotes if present.

    Allows values like command_prefix to be written as "/" without the quotes
    becoming part of the value. Unquoted values are returned unchanged.
    """
    if not isinstance(s, str):
        return s
    s = s.strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in '"\'':
        return s[1:-1]
    return s


def _get_command_prefix_to_section() -> Dict[str, str]:
    """Build map from command name (lowercase) to canonical section for similarity suggestions.

    Discovers command sections from config.ini.example in the project, falling
    back to the built-in command list. Returns e.g. {"sports": "Sports_Command"}.
    """
    result: Dict[str, str] = {
        section[:-8].lower(): section for section in DEFAULT_COMMAND_SECTIONS
    }
    example_path = Path(__file__).resolve().parent.parent / "config.ini.example"
    if example_path.exists():
        parser = configparser.ConfigParser()
        try:
            parser.read(example_path, encoding="utf-8")
        except configparser.Error:
            return result
        for section in parser.sections():
            if section.endswith("_Command"):
                result[section[:-8].lower()] = section
    return result


def _suggest_similar_command(section: str, prefix_to_section: Dict[str, str]) -> Optional[str]:
    """If section looks like a command name (e.g. Sports, ai), suggest the canonical section."""
    return prefix_to_section.get(section.strip().lower())


def _resolve_path(file_path: str, base_dir: Path) -> Path:
    """Resolve a path relative to base_dir (or as absolute)."""
    p = Path(file_path)
    if p.is_absolute():
        return p.resolve()
    return (base_dir.resolve() / p).resolve()


def _check_path_writable(
    file_path: str, base_dir: Path, description: str
) -> Optional[str]:
    """Check if a file path can be written. Returns warning message if not."""
    if not file_path or not file_path.strip():
        return None
    try:
        resolved = _resolve_path(file_path.strip(), base_dir)
    except (OSError, RuntimeError):
        return f"{description}: cannot resolve path '{file_path}'"
    # Find first existing ancestor to check writability
    check_dir = resolved.parent
    while not check_dir.exists():
        if check_dir == check_dir.parent:
            return f"{description} '{resolved}': parent directory does not exist"
        check_dir = check_dir.parent
    if not os.access(str(check_dir), os.W_OK):
        return f"{description} '{resolved}': directory {check_dir} is not writable"
    if resolved.exists() and not os.access(str(resolved), os.W_OK):
        return f"{description} '{resolved}': file exists but is not writable"
    return None


def _check_api_keys(config: configparser.ConfigParser) -> List[Tuple[str, str]]:
    results: List[Tuple[str, str]] = []
    for key, command in API_KEY_USERS.items():
        value = strip_optional_quotes(config.get("Api_Keys", key, fallback=""))
        if not value:
            results.append((
                SEVERITY_WARNING,
                f"[Api_Keys] {key} is not set; {command} will not work.",
            ))
        elif not validate_api_key_format(value):
            results.append((
                SEVERITY_WARNING,
                f"[Api_Keys] {key} looks like a placeholder or is too short.",
            ))
    return results


def _check_positive_numbers(config: configparser.ConfigParser) -> List[Tuple[str, str]]:
    results: List[Tuple[str, str]] = []
    for section, option in POSITIVE_NUMBERS:
        if not config.has_option(section, option):
            continue
        raw = config.get(section, option).strip()
        try:
            value = float(raw)
        except ValueError:
            results.append((
                SEVERITY_ERROR,
                f"[{section}] {option} = {raw!r} is not a number.",
            ))
            continue
        if value <= 0:
            results.append((
                SEVERITY_WARNING,
                f"[{section}] {option} = {raw} should be positive; the default will be used.",
            ))

    if config.has_section("Cooldowns"):
        for option, raw in config.items("Cooldowns"):
            try:
                if float(raw) < 0:
                    results.append((SEVERITY_WARNING, f"[Cooldowns] {option} = {raw} is negative."))
            except ValueError:
                results.append((SEVERITY_ERROR, f"[Cooldowns] {option} = {raw!r} is not a number."))
    return results


def validate_config(config_path: str) -> List[Tuple[str, str]]:
    """
    Validate a config file. Returns a list of (severity, message).

    Args:
        config_path: Path to config.ini (or other config file).

    Returns:
        List of (severity, message). severity is one of SEVERITY_*.
    """
    path = Path(config_path)
    if not path.exists():
        return [(SEVERITY_ERROR, f"Config file not found: {config_path}")]

    config = configparser.ConfigParser()
    try:
        config.read(config_path, encoding="utf-8")
    except configparser.Error as e:
        return [(SEVERITY_ERROR, f"Failed to parse config: {e}")]

    results: List[Tuple[str, str]] = []

    sections_present = frozenset(s.strip() for s in config.sections() if s.strip())
    for section in sorted(REQUIRED_SECTIONS - sections_present):
        results.append((
            SEVERITY_ERROR,
            f"Missing required section [{section}]; bot will not start without it.",
        ))

    results.extend(_check_api_keys(config))
    results.extend(_check_positive_numbers(config))

    if config.has_section("Logging"):
        log_file = config.get("Logging", "log_file", fallback="").strip()
        if log_file:
            msg = _check_path_writable(log_file, path.resolve().parent, "Log file path")
            if msg:
                results.append((SEVERITY_WARNING, msg))

    transport_type = config.get("Transport", "type", fallback="console").strip().lower()
    if transport_type != "console":
        results.append((
            SEVERITY_ERROR,
            f"[Transport] type = {transport_type!r} is not supported (expected 'console').",
        ))

    prefix_to_section: Optional[Dict[str, str]] = None

    for section in config.sections():
        section_stripped = section.strip()
        if not section_stripped:
            continue

        if section_stripped in CANONICAL_NON_COMMAND_SECTIONS:
            continue
        if section_stripped.endswith("_Command"):
            continue

        if section_stripped in SECTION_TYPO_MAP:
            results.append((
                SEVERITY_WARNING,
                f"Non-standard section [{section_stripped}]; did you mean [{SECTION_TYPO_MAP[section_stripped]}]?",
            ))
        else:
            if prefix_to_section is None:
                prefix_to_section = _get_command_prefix_to_section()
            similar = _suggest_similar_command(section_stripped, prefix_to_section)
            if similar:
                msg = f"Unknown section [{section_stripped}]; did you mean [{similar}]?"
            else:
                msg = f"Unknown section [{section_stripped}] (not in canonical list and not a *_Command section)."
            results.append((SEVERITY_INFO, msg))

    return results
