"""Shared configuration loader for the message coder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .decoder import MessageDecoder
from .encoder import MAX_SYMBOLS_PER_CODEWORD, MessageEncoder
from .model import (
    DEFAULT_FREQUENCY_TABLE,
    DEFAULT_TERMINATOR,
    FrequencyTable,
    FrequencyTableError,
    RangeTable,
    build_range_table,
)


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


DEFAULT_CONFIG_PATH = Path.home() / ".ledgercoder.yaml"
_CONFIG_PATH_OVERRIDE: Path | None = None


@dataclass
class CoderConfig:
    """Settings shared by every encoder and decoder built from one config."""

    frequencies: FrequencyTable = field(default_factory=lambda: DEFAULT_FREQUENCY_TABLE)
    max_symbols_per_codeword: int = MAX_SYMBOLS_PER_CODEWORD

    @property
    def terminator(self) -> str:
        return self.frequencies.terminator

    def range_table(self) -> RangeTable:
        return build_range_table(self.frequencies)

    def build_encoder(self, table: RangeTable | None = None) -> MessageEncoder:
        if table is None:
            table = self.range_table()
        return MessageEncoder(table, self.max_symbols_per_codeword)

    def build_decoder(self, table: RangeTable | None = None) -> MessageDecoder:
        if table is None:
            table = self.range_table()
        return MessageDecoder(table, self.max_symbols_per_codeword)


def set_default_config_path(path: str | Path | None) -> None:
    """Remember a user-supplied config path for future loads."""

    global _CONFIG_PATH_OVERRIDE
    _CONFIG_PATH_OVERRIDE = Path(path).expanduser() if path else None


def _load_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        loaded = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML object with a 'coder' section")
    return loaded


def _coerce_limit(raw: Any, *, source: str) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ConfigurationError(f"Invalid max_symbols_per_codeword in {source}: {raw}")
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid max_symbols_per_codeword in {source}: {raw}") from exc
    if value < 1:
        raise ConfigurationError(f"max_symbols_per_codeword in {source} must be at least 1")
    return value


def _first_value(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def _parse_frequencies(raw: Any, terminator: str, *, source: str) -> FrequencyTable:
    if not isinstance(raw, list):
        raise ConfigurationError(f"Expected 'frequencies' in {source} to be a list")

    pairs: list[tuple[Any, Any]] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict) or "symbol" not in item or "weight" not in item:
            raise ConfigurationError(
                f"Frequency entry {index} in {source} needs 'symbol' and 'weight' keys"
            )
        pairs.append((item["symbol"], item["weight"]))

    try:
        return FrequencyTable.from_pairs(pairs, terminator=terminator)
    except FrequencyTableError as exc:
        raise ConfigurationError(f"Invalid frequency table in {source}: {exc}") from exc


def load_coder_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> CoderConfig:
    """Load coder settings from overrides, environment variables and optional YAML."""

    env_map = os.environ if env is None else env
    env_path = env_map.get("LEDGERCODER_CONFIG")
    explicit_path = (
        config_path is not None or _CONFIG_PATH_OVERRIDE is not None or bool(env_path)
    )
    if config_path is not None:
        path = Path(config_path).expanduser()
    elif _CONFIG_PATH_OVERRIDE is not None:
        path = _CONFIG_PATH_OVERRIDE
    elif env_path:
        path = Path(env_path).expanduser()
    else:
        path = DEFAULT_CONFIG_PATH

    file_config = _load_config_file(path, required=explicit_path)
    coder_section = file_config.get("coder") or {}
    if not isinstance(coder_section, dict):
        raise ConfigurationError(f"Expected 'coder' to be a mapping in {path}")

    override_map = dict(overrides or {})

    max_symbols = _first_value(
        _coerce_limit(override_map.get("max_symbols_per_codeword"), source="overrides"),
        _coerce_limit(env_map.get("LEDGERCODER_MAX_SYMBOLS"), source="environment"),
        _coerce_limit(
            coder_section.get("max_symbols_per_codeword"), source=f"{path} coder section"
        ),
        MAX_SYMBOLS_PER_CODEWORD,
    )

    terminator = _first_value(coder_section.get("terminator"), DEFAULT_TERMINATOR)
    raw_frequencies = coder_section.get("frequencies")
    if raw_frequencies is None:
        if terminator != DEFAULT_TERMINATOR:
            raise ConfigurationError(
                f"A custom terminator in {path} requires a 'frequencies' list"
            )
        frequencies = DEFAULT_FREQUENCY_TABLE
    else:
        frequencies = _parse_frequencies(raw_frequencies, str(terminator), source=str(path))

    return CoderConfig(frequencies=frequencies, max_symbols_per_codeword=max_symbols)
