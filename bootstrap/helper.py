"""
Common helpers for the provisioning CLIs.

Exposed functions (signatures):
    load_yaml(path: pathlib.Path) -> dict[str, Any]
    load_table_config(path: pathlib.Path) -> dict[str, Any]
    normalize_user_tags(tag_str: str) -> list[dict[str, str]]
    boto3_session(profile: str | None, region: str | None = None) -> "boto3.Session"

Behavior:
    - `load_yaml` safely loads YAML files, defaulting to {} for empty files.
    - `load_table_config` fills in table defaults and validates the document.
    - `normalize_user_tags` converts "K1=V1,K2=V2" into AWS tag dicts.
    - `boto3_session` builds a boto3 session honoring an optional profile.

Raises:
    FileNotFoundError: When a provided path does not exist.
    ValueError: For malformed tag strings or table documents.

Example:
    >>> from pathlib import Path
    >>> table = load_table_config(Path("config/table.yaml"))
    >>> table["table_name"]
    'UrlShortener'
"""

from __future__ import annotations

import pathlib
from typing import Any

import boto3
import yaml

from urlshortener.constants import Store


BILLING_MODES = ("PAY_PER_REQUEST", "PROVISIONED")

# The service reads and writes these attribute names, so they are not configurable
FIXED_ATTRIBUTES = ("partition_key", "ttl_attribute")

TABLE_DEFAULTS: dict[str, Any] = {
    "table_name": Store.DEFAULT_TABLE_NAME,
    "partition_key": Store.PARTITION_KEY,
    "ttl_attribute": Store.TTL_ATTRIBUTE,
    "billing_mode": "PAY_PER_REQUEST",
    "point_in_time_recovery": True,
}


def load_yaml(path: pathlib.Path) -> dict[str, Any]:
    """Load a YAML file into a Python dictionary.

    Args:
        path (pathlib.Path):
            Path to a YAML file.

    Returns:
        Dict[str, Any]:
            Parsed YAML document. Returns {} for empty files.

    Raises:
        FileNotFoundError:
            If the file does not exist.
    """
    if not path.is_file():
        raise FileNotFoundError(f"YAML not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


def load_table_config(path: pathlib.Path) -> dict[str, Any]:
    """Load a table description, falling back to defaults for omitted keys.

    Expected YAML shape (every key optional):
        table:
          table_name: UrlShortener
          partition_key: shortCode
          ttl_attribute: expiration
          billing_mode: PAY_PER_REQUEST
          point_in_time_recovery: true

    Raises:
        FileNotFoundError:
            If the file does not exist.
        ValueError:
            If the `table` section is not a mapping, has unknown keys,
            names an unsupported billing mode, or renames a fixed attribute.
    """
    doc = load_yaml(path)
    table = doc.get("table") or {}
    if not isinstance(table, dict):
        raise ValueError(f"'table' section must be a mapping in {path}")

    unknown = sorted(set(table) - set(TABLE_DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown table keys in {path}: {', '.join(unknown)}")

    config = {**TABLE_DEFAULTS, **table}
    if config["billing_mode"] not in BILLING_MODES:
        raise ValueError(f"Unsupported billing_mode '{config['billing_mode']}' (expected one of: {', '.join(BILLING_MODES)})")
    for key in FIXED_ATTRIBUTES:
        if config[key] != TABLE_DEFAULTS[key]:
            raise ValueError(f"{key} must be '{TABLE_DEFAULTS[key]}' to match the service's item layout (given value: '{config[key]}')")
    return config


def normalize_user_tags(tag_str: str) -> list[dict[str, str]]:
    """Normalize a comma-separated tag string into AWS tag dicts.

    Input format:
        "Key1=Val1,Key2=Val2"

    Args:
        tag_str (str):
            Comma-separated tags.

    Returns:
        list[dict[str, str]]:
            Items like [{"Key": "Owner", "Value": "Pesho"}, ...].

    Raises:
        ValueError:
            If an entry is malformed (missing '=' or empty key).

    Example:
        >>> normalize_user_tags("Owner=Pesho,Service=urlshortener")
        [{'Key': 'Owner', 'Value': 'Pesho'}, {'Key': 'Service', 'Value': 'urlshortener'}]
    """
    tags: list[dict[str, str]] = []
    if not tag_str:
        return tags

    for raw in tag_str.split(","):
        item = raw.strip()
        if not item:
            # Skip empty segments like trailing commas.
            continue
        if "=" not in item:
            raise ValueError(f"Malformed tag (expected key=value): '{item}'")
        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Malformed tag (empty key): '{item}'")
        tags.append({"Key": key, "Value": value.strip()})
    return tags


def boto3_session(profile: str | None, region: str | None = None):
    """Return a boto3 Session honoring an optional profile and region.

    Example:
        >>> session = boto3_session("personal-dev")  # doctest: +SKIP
        >>> dynamodb = session.client("dynamodb")    # doctest: +SKIP
    """
    kwargs = {}
    if profile:
        kwargs["profile_name"] = profile
    if region:
        kwargs["region_name"] = region
    return boto3.Session(**kwargs)
