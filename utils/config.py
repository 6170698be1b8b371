"""
Configuration management
"""

import copy
import yaml
import os
from pathlib import Path
from typing import Dict, Any
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


DEFAULT_CONFIG: Dict[str, Any] = {
    'api': {
        'base_url': 'https://thepartykart.com',
        'endpoint': '/v1/bill/generate-invoice',
        'timeout': 30
    },
    'data': {
        'dir': './data',
        'companies': 'companies.yaml'
    },
    'output': {
        'dir': './output'
    },
    'logging': {
        'level': 'INFO'
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file, falling back to defaults"""

    config_file = Path(config_path)

    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            config = _merge(DEFAULT_CONFIG, yaml.safe_load(f) or {})
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    # Override with environment variables if present
    if os.getenv('INVOICE_API_BASE_URL'):
        config['api']['base_url'] = os.getenv('INVOICE_API_BASE_URL')
    if os.getenv('INVOICE_API_TIMEOUT'):
        config['api']['timeout'] = float(os.getenv('INVOICE_API_TIMEOUT'))
    if os.getenv('INVOICE_LOG_LEVEL'):
        config['logging']['level'] = os.getenv('INVOICE_LOG_LEVEL')

    return config


def get_data_path(filename: str, config: Dict = None) -> Path:
    """Get path to data file"""

    if config is None:
        config = load_config()

    data_dir = Path(config.get('data', {}).get('dir', './data'))
    return data_dir / filename


def get_output_dir(config: Dict = None) -> Path:
    """Output directory for reports and documents, created on demand"""

    if config is None:
        config = load_config()

    output_dir = Path(config.get('output', {}).get('dir', './output'))
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir
