import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
POLICY_PATH = CONFIG_DIR / "policy.yaml"
BANKS_PATH = CONFIG_DIR / "banks.yaml"

# Used when config/policy.yaml is absent or leaves a key out.
DEFAULT_POLICY: Dict[str, Any] = {
    "dsr_cap": 0.35,
    "financing_ratio": 0.90,
    "dsr_bands": {"excellent": 30, "good": 35},
    "stamp_duty_tiers": [
        {"up_to": 100000, "rate": 0.01},
        {"up_to": 500000, "rate": 0.02},
        {"up_to": 1000000, "rate": 0.03},
        {"up_to": None, "rate": 0.04},
    ],
    "legal_fee_base": 1000,
    "legal_fee_floor": 500,
    "legal_fee_tiers": [
        {"up_to": 150000, "rate": 0.01},
        {"up_to": 1000000, "rate": 0.008},
        {"up_to": None, "rate": 0.007},
    ],
    "valuation_fee_rate": 0.0025,
    "valuation_fee_cap": 2500,
    "mrta_rate": 0.006,
    "max_compare": 3,
    "default_selection": ["maybank", "cimb", "public-bank"],
}


def _resolve(path: Optional[Path], env_var: str, default: Path) -> Path:
    if path is not None:
        return Path(path)
    override = os.getenv(env_var)
    return Path(override) if override else default


def load_policy(path: Optional[Path] = None) -> Dict[str, Any]:
    """Policy knobs from YAML, merged over DEFAULT_POLICY."""
    policy_path = _resolve(path, "MORTGAGEMY_POLICY", POLICY_PATH)
    policy = dict(DEFAULT_POLICY)
    if policy_path.exists():
        loaded = yaml.safe_load(policy_path.read_text(encoding="utf-8")) or {}
        for key, value in loaded.items():
            # nested sections (dsr_bands, ...) override key by key
            if isinstance(value, dict) and isinstance(policy.get(key), dict):
                policy[key] = {**policy[key], **value}
            else:
                policy[key] = value
    else:
        logger.warning("Policy file %s not found, using built-in defaults", policy_path)
    return policy


def load_bank_rows(path: Optional[Path] = None) -> Optional[List[Dict[str, Any]]]:
    """Raw bank catalog rows from YAML, or None when the file is missing."""
    banks_path = _resolve(path, "MORTGAGEMY_BANKS", BANKS_PATH)
    if not banks_path.exists():
        logger.warning("Bank catalog %s not found", banks_path)
        return None
    return yaml.safe_load(banks_path.read_text(encoding="utf-8")) or []
