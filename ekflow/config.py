from typing import Any, Dict
import logging
import os

from dotenv import load_dotenv

from .flow.edmonds_karp import DEFAULT_EPSILON

GRAPH_TYPES = ('networkx', 'ortools')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off', ''):
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")

def load_config() -> Dict[str, Any]:
    """Load flow settings from the environment (and a .env file if present)."""
    load_dotenv()

    raw_epsilon = os.getenv('EKFLOW_EPSILON')
    try:
        epsilon = DEFAULT_EPSILON if raw_epsilon is None else float(raw_epsilon)
    except ValueError:
        raise ValueError(f"EKFLOW_EPSILON must be a number, got {raw_epsilon!r}")
    if epsilon <= 0:
        raise ValueError(f"EKFLOW_EPSILON must be positive, got {epsilon}")

    graph_type = os.getenv('EKFLOW_GRAPH_TYPE', 'networkx').strip().lower()
    if graph_type not in GRAPH_TYPES:
        raise ValueError(f"EKFLOW_GRAPH_TYPE must be one of {', '.join(GRAPH_TYPES)}, got {graph_type!r}")

    log_level = os.getenv('EKFLOW_LOG_LEVEL', 'INFO').strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"EKFLOW_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return {
        'epsilon': epsilon,
        'graph_type': graph_type,
        'log_level': getattr(logging, log_level),
        'cross_check': _parse_bool('EKFLOW_CROSS_CHECK', os.getenv('EKFLOW_CROSS_CHECK', '')),
    }
