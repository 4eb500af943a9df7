# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import os

from configparser import ConfigParser, Error as ConfigParserError
from pathlib import Path
from typing import NamedTuple

from mkjail.errors import ConfigurationError

SHORTNAME = "mkjail"
ROOT_ENV_NAME = "MKJAIL_ROOT"


class Settings(NamedTuple):
    root: str
    binds: list


def get_config_path() -> Path:
    '''
    Location of the optional defaults file, in the home of the user who ran sudo
    '''
    username = ''
    if os.getuid() == 0 and 'SUDO_USER' in os.environ:
        username = os.environ['SUDO_USER']
    return Path(f'~{username}/.local/share/{SHORTNAME}.conf').expanduser()


def get_settings(config_path=None, environ=None) -> Settings:
    '''
    Determine the defaults for options not given on the command line
    '''
    if config_path is None:
        config_path = get_config_path()
    if environ is None:
        environ = os.environ

    cfg = ConfigParser(interpolation=None)
    try:
        cfg.read(config_path)
    except ConfigParserError as e:
        first_line = str(e).splitlines()[0]
        raise ConfigurationError(f"Invalid defaults file {config_path}: {first_line}")
    section = cfg['DEFAULT']

    # the environment wins over the defaults file
    root = environ.get(ROOT_ENV_NAME) or section.get('root') or None

    binds = [
        line.strip()
        for line in section.get('binds', '').splitlines()
        if line.strip()
    ]

    return Settings(root, binds)
