import json
import logging
import os
import re
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

import pytz

from gorilli.config import CONTRACTS_DIR, LOG_LEVEL

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"

_address_re = re.compile(ADDRESS_PATTERN)


def get_logger(name: str) -> logging.Logger:
    """Set up and return a logger with the specified name."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(LOG_LEVEL)
    return logger


def is_address(value: str) -> bool:
    return bool(_address_re.match(value or ""))


def deadline_from_now(seconds: int) -> int:
    """Unix timestamp `seconds` from now, in UTC."""
    return int(datetime.now(pytz.UTC).timestamp()) + seconds


def format_percent(value: float) -> str:
    """Render a percentage as given, without a trailing '.0' or exponent (2.0 -> '2', 1e-05 -> '0.00001')."""
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def load_abi(abi_name: str) -> Dict[str, Any]:
    """Load an ABI and bytecode (if available) from a JSON artifact.

    Args:
        abi_name (str): Name of the artifact to load (e.g., 'ERC4626', 'ERC4626Vault').
    Returns:
        Dict[str, Any]: A dictionary containing 'abi' (list) and 'bytecode' (str, possibly empty).
    Raises:
        FileNotFoundError: If the artifact is found in neither directory.
        ValueError: If the artifact is invalid or missing the 'abi' field.

    Compiled artifacts in CONTRACTS_DIR take precedence over the ABIs bundled
    with the package, so a Foundry or Hardhat build output can supply bytecode.
    """
    logger = get_logger(__name__)
    abis_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "abis")

    for directory in [CONTRACTS_DIR, abis_dir]:
        artifact_path = os.path.join(directory, f"{abi_name}.json")
        try:
            with open(artifact_path, "r") as f:
                data = json.load(f)
        except FileNotFoundError:
            continue
        except json.JSONDecodeError:
            raise ValueError(f"Invalid JSON in artifact {artifact_path}")
        if "abi" not in data:
            raise ValueError(f"ABI not found in {abi_name}.json")
        bytecode = data.get("bytecode", "")
        if isinstance(bytecode, dict) and "object" in bytecode:
            bytecode = bytecode["object"]
        if bytecode and isinstance(bytecode, str) and not bytecode.startswith("0x"):
            bytecode = "0x" + bytecode
        logger.debug(f"Loaded ABI for {abi_name} from {artifact_path}")
        return {"abi": data["abi"], "bytecode": bytecode}

    logger.error(f"ABI file not found in {CONTRACTS_DIR} or bundled abis: {abi_name}.json")
    raise FileNotFoundError(f"ABI file not found in {CONTRACTS_DIR} or bundled abis: {abi_name}.json")
