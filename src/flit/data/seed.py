"""Seed data loading for the local mock backend."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml


@lru_cache(maxsize=1)
def load_seed_data() -> Dict[str, Any]:
    """
    Load the mock catalogue from the packaged YAML file.

    Returns:
        Dictionary with assets, users, leagues, portfolios, matchups, stocks
        and learning portfolios

    Raises:
        FileNotFoundError: If the seed file doesn't exist
        yaml.YAMLError: If the YAML file is malformed
    """
    seed_file = Path(__file__).parent / "mock_fantasy.yaml"

    try:
        with open(seed_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Seed data file not found: {seed_file}")
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Error parsing seed data YAML file: {e}")
