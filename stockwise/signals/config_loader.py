"""
YAML configuration loader for backtests.

Loads a strategy choice, its parameters and the data window from a YAML
file, so strategies can be shared and tweaked without code changes.

Example:

    name: macd_default
    description: Classic 12/26/9 MACD cross
    strategy:
      id: macd_cross
      params:
        fast: 12
        slow: 26
        signal: 9
    data:
      path: data/600519.csv
      start_date: "2022-01-01"
      end_date: "2024-01-01"
"""
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .config import BacktestConfig


def _optional_str(value: Any):
    return None if value is None else str(value)


def load_config_from_yaml(yaml_path: Union[str, Path]) -> BacktestConfig:
    """
    Load backtest configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        BacktestConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty, lacks strategy.id, or holds invalid parameters
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")

    strategy: Dict[str, Any] = config_dict.get('strategy') or {}
    if not strategy.get('id'):
        raise ValueError(f"Config {yaml_path} must set strategy.id")

    data_params: Dict[str, Any] = config_dict.get('data') or {}

    return BacktestConfig(
        name=config_dict.get('name', yaml_path.stem),
        description=config_dict.get('description', ''),
        strategy=strategy['id'],
        params=strategy.get('params') or {},
        data_path=_optional_str(data_params.get('path')),
        # YAML turns unquoted dates into date objects; keep them as ISO strings
        start_date=_optional_str(data_params.get('start_date')),
        end_date=_optional_str(data_params.get('end_date')),
    )
