"""JSON and YAML import/export of pricing configurations.

The document format is a plain object::

    {
      "currency": "USD",
      "mrr": 0,
      "discount": 0,
      "tiers": [
        {"sequence": 1, "units": 100, "price": 0, "unitPrice": 10,
         "freeUnits": 10, "multiplier": 1},
        {"sequence": 3, "units": 500, "price": 0, "unitPrice": 3,
         "freeUnits": 0, "multiplier": "infinity"}
      ]
    }

Unlimited multipliers are written as the string "infinity".
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .constraints import DISCOUNT_CONSTRAINT, MRR_CONSTRAINT, normalize_tier
from .currency import DEFAULT_CURRENCY, get_currency, is_supported
from .errors import ConfigFileNotFoundError, ConfigurationError, InvalidConfigFormatError
from .logging import LogEvent, log_debug, log_info, log_warning
from .models import DEFAULT_TIERS, Multiplier, PricingConfig, Tier, Unlimited

INFINITY_TOKEN = "infinity"

YAML_SUFFIXES = (".yml", ".yaml")


def multiplier_to_json(multiplier: Multiplier) -> Union[int, str]:
    """Encode a multiplier for the document format."""
    if isinstance(multiplier, Unlimited):
        return INFINITY_TOKEN
    return multiplier.count


def tier_to_dict(tier: Tier) -> Dict[str, Any]:
    """Encode a tier as a document record."""
    return {
        "sequence": tier.sequence,
        "units": tier.units,
        "price": tier.price,
        "unitPrice": tier.unit_price,
        "freeUnits": tier.free_units,
        "multiplier": multiplier_to_json(tier.multiplier),
    }


def config_to_dict(config: PricingConfig) -> Dict[str, Any]:
    """Encode a configuration as a plain document."""
    return {
        "currency": config.currency,
        "mrr": config.mrr,
        "discount": config.discount,
        "tiers": [tier_to_dict(tier) for tier in config.tiers],
    }


def config_from_dict(data: Any, path: Union[str, Path, None] = None) -> PricingConfig:
    """Decode a document into a configuration.

    Missing or unusable fields fall back to defaults: unknown currencies to
    USD, non-numeric mrr/discount to 0, a missing or empty tier list to the
    default tiers. Out-of-range numbers are clamped.

    Raises:
        InvalidConfigFormatError: If the document is not an object or a tier
            record is not an object
        ConfigurationError: If the decoded values are inconsistent
    """
    path_str = str(path) if path is not None else None
    if not isinstance(data, dict):
        raise InvalidConfigFormatError(
            f"Pricing configuration must be an object, got {type(data).__name__}",
            path=path_str,
        )

    currency = DEFAULT_CURRENCY.code
    raw_currency = data.get("currency")
    if isinstance(raw_currency, str) and raw_currency:
        if not is_supported(raw_currency):
            log_warning(
                LogEvent.CONFIG_LOAD,
                f"Unknown currency '{raw_currency}', using {DEFAULT_CURRENCY.code}",
                path=path_str,
            )
        currency = get_currency(raw_currency).code

    mrr = MRR_CONSTRAINT.normalize(data.get("mrr"))
    discount = DISCOUNT_CONSTRAINT.normalize(data.get("discount"))

    raw_tiers = data.get("tiers")
    if raw_tiers is None or raw_tiers == []:
        tiers = DEFAULT_TIERS
    elif not isinstance(raw_tiers, list):
        raise InvalidConfigFormatError(
            f"'tiers' must be a list, got {type(raw_tiers).__name__}",
            path=path_str,
            expected_type="list",
        )
    else:
        decoded = []
        for position, record in enumerate(raw_tiers, start=1):
            if not isinstance(record, dict):
                raise InvalidConfigFormatError(
                    f"Tier #{position} must be an object, got {type(record).__name__}",
                    path=path_str,
                )
            decoded.append(normalize_tier(record, default_sequence=position))
        tiers = tuple(decoded)

    try:
        return PricingConfig(currency=currency, mrr=mrr, discount=discount, tiers=tiers)
    except ConfigurationError as e:
        raise ConfigurationError(e.message, path=path_str) from e


def dumps(config: PricingConfig, indent: int = 2) -> str:
    """Serialize a configuration to JSON text."""
    return json.dumps(config_to_dict(config), indent=indent, ensure_ascii=False)


def loads(text: str) -> PricingConfig:
    """Parse a configuration from JSON text.

    Raises:
        InvalidConfigFormatError: If the text is not valid JSON
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidConfigFormatError(f"Invalid JSON: {e}") from e
    return config_from_dict(data)


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


def load_config(path: Union[str, Path]) -> PricingConfig:
    """Load a configuration file (JSON, or YAML by suffix).

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        InvalidConfigFormatError: If the file cannot be parsed
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigFileNotFoundError(f"Configuration file not found: {file_path}", path=str(file_path))

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Could not read {file_path}: {e}", path=str(file_path)) from e

    try:
        if _is_yaml(file_path):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidConfigFormatError(f"Could not parse {file_path}: {e}", path=str(file_path)) from e

    config = config_from_dict(data, path=file_path)
    log_info(LogEvent.CONFIG_LOAD, "Loaded pricing configuration", path=str(file_path), tiers=len(config.tiers))
    return config


def save_config(config: PricingConfig, path: Union[str, Path]) -> Path:
    """Write a configuration file (JSON, or YAML by suffix).

    Returns:
        The path written
    """
    file_path = Path(path)
    if _is_yaml(file_path):
        content = yaml.safe_dump(config_to_dict(config), default_flow_style=False, sort_keys=False, allow_unicode=True)
    else:
        content = dumps(config) + "\n"

    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    log_debug(LogEvent.CONFIG_SAVE, "Saved pricing configuration", path=str(file_path))
    return file_path
