"""
Helpers shared by the CLI entry points.
"""
import logging
import sys
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml


def setup_logging(verbose: bool = False):
    """
    Setup logging to stdout.

    Args:
        verbose: If True, use DEBUG level, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def parse_param_pairs(pairs: Optional[List[str]]) -> Dict[str, Any]:
    """
    Parse repeated `key=value` arguments into a dict.

    Values go through YAML scalar parsing, so `12` is an int, `2.5` a float.

    Raises:
        ValueError: If an entry has no `=` or an empty key
    """
    params: Dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition('=')
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid parameter {pair!r}, expected key=value")
        params[key] = yaml.safe_load(value)
    return params


def format_time(time: int) -> str:
    """Unix seconds as a YYYY-MM-DD date."""
    return pd.to_datetime(time, unit='s').strftime('%Y-%m-%d')
