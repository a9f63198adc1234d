#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml


DEFAULT_LOG_FORMAT = '[%(asctime).19s] [%(name)s] [%(levelname)s] %(message)s'

# Libraries that log every request at INFO
NOISY_LOGGERS = ('httpx', 'httpcore')

_HANDLER_NAME = 'dice-console'


def configure_logger(logger: Union[logging.Logger, str, None] = None,
                     log_file: Optional[str] = None,
                     log_format: str = DEFAULT_LOG_FORMAT,
                     log_level: int = logging.INFO) -> logging.Logger:
    """Send a logger's output (the root logger by default) to stderr or a file

    Calling this again replaces the handler installed by the previous call
    rather than adding a second one. Unless log_level is DEBUG, HTTP
    client request logging is held back to warnings.

    Returns:
        The configured logger
    """
    if logger is None or isinstance(logger, str):
        logger = logging.getLogger(logger)

    if log_file:
        handler: logging.Handler = logging.FileHandler(
            log_file, mode='a', encoding='utf-8')
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(log_format))
    handler.set_name(_HANDLER_NAME)

    for old in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING)

    return logger


def get_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """Load console runner settings from a JSON or YAML file

    Without a file every setting takes its default. Recognized keys:
        data_folder: Directory for plugin data (default 'plugins-data')
        log_level: Logging level name (default 'info')
        log_file: Log to this file instead of stderr
        color: Render chat colors as ANSI escapes (default true)
        players: Simulated players, each
            {name, world, x, y, z, permissions: [...]}

    Returns:
        Settings dictionary with defaults filled in

    Raises:
        ValueError: If the file is not a mapping or a player entry is invalid
    """
    conf: Dict[str, Any] = {}
    if config_file:
        with open(config_file, 'r', encoding='utf-8') as fp:
            if config_file.endswith(('.yaml', '.yml')):
                conf = yaml.safe_load(fp) or {}
            else:
                conf = json.load(fp)
        if not isinstance(conf, dict):
            raise ValueError(f'{config_file}: settings must be a mapping')

    players: List[Dict[str, Any]] = []
    for entry in conf.get('players', []) or []:
        if not isinstance(entry, dict) or 'name' not in entry:
            raise ValueError(f'Invalid player entry: {entry!r}')
        players.append({
            'name': str(entry['name']),
            'world': str(entry.get('world', 'world')),
            'x': float(entry.get('x', 0)),
            'y': float(entry.get('y', 64)),
            'z': float(entry.get('z', 0)),
            'permissions': list(entry.get('permissions', [])),
        })

    log_level_str = str(conf.get('log_level', 'info'))
    log_level = getattr(logging, log_level_str.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f'Unknown log level: {log_level_str}')

    return {
        'data_folder': Path(conf.get('data_folder', 'plugins-data')),
        'log_level': log_level,
        'log_file': conf.get('log_file'),
        'log_format': conf.get('log_format', DEFAULT_LOG_FORMAT),
        'color': bool(conf.get('color', True)),
        'players': players,
    }
