# -*- coding: utf-8 -*-
"""bookit.config
License:  MIT
About:
Configuration file handling and data directory resolution. The
environment is read once, here, and the resulting Config is handed to
everything else.

"""
import configparser
import logging
import os
import string

from bookit import APP_NAME
from bookit.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_DATA_DIR = "BOOKIT_DIR"
DEFAULT_DATA_DIR = f"$HOME/.local/share/{APP_NAME}"
DEFAULT_CONFIG_FILE = f"$HOME/.config/{APP_NAME}/config"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_COLORS = {
    "title": "bright_blue",
    "header": "bright_black",
    "border": "white",
    "label": "white",
    "slug": "red",
    "name": "blue",
    "contractor": "cyan",
    "description": "default",
    "rate": "green",
    "alias": "magenta",
    "minutes": "green",
    "date": "green",
    "ticket": "default"
}
DEFAULT_CONFIG = (
    "[main]\n"
    "# the data directory; the BOOKIT_DIR environment variable takes\n"
    "# precedence when it is set\n"
    f"data_dir = {DEFAULT_DATA_DIR}\n"
    "# log level for diagnostics on stderr\n"
    f"#log_level = {DEFAULT_LOG_LEVEL}\n"
    "\n"
    "[colors]\n"
    "disable_colors = false\n"
    "disable_bold = false\n"
    "# set to 'true' if your terminal pager supports color\n"
    "# output and you would like color output when using\n"
    "# the '--page' ('-p') option\n"
    "color_pager = false\n"
    "# custom colors\n"
    "#title = bright_blue\n"
    "#header = bright_black\n"
    "#border = white\n"
    "#label = white\n"
    "#slug = red\n"
    "#name = blue\n"
    "#contractor = cyan\n"
    "#description = default\n"
    "#rate = green\n"
    "#alias = magenta\n"
    "#minutes = green\n"
    "#date = green\n"
    "#ticket = default\n"
)


def _expand(path, environ):
    """Expand `~` and `$VAR` against the given environment."""
    if environ.get("HOME") and (path == "~" or path.startswith("~/")):
        path = environ["HOME"] + path[1:]
    return string.Template(path).safe_substitute(environ)


def default_config_file(environ):
    """The config file location, honouring XDG_CONFIG_HOME."""
    if environ.get("XDG_CONFIG_HOME"):
        return os.path.join(
            _expand(environ["XDG_CONFIG_HOME"], environ), APP_NAME, "config")
    return _expand(DEFAULT_CONFIG_FILE, environ)


def default_data_dir(environ):
    """The data directory written to a new config, honouring
    XDG_DATA_HOME.
    """
    if environ.get("XDG_DATA_HOME"):
        return os.path.join(
            _expand(environ["XDG_DATA_HOME"], environ), APP_NAME)
    return DEFAULT_DATA_DIR


class Config():
    """Resolved application settings.

    Attributes:
        config_file (str):  the config file that was read.
        data_dir (str):     directory holding the collection files.
        log_level (str):    root log level name.
        colors (dict):      element name -> Rich color name.
        color_enabled (bool):   colors are enabled.
        color_bold (bool):  bold styles are enabled.
        color_pager (bool): keep colors when paging.

    """
    def __init__(
            self,
            config_file,
            data_dir,
            log_level=DEFAULT_LOG_LEVEL,
            colors=None,
            color_enabled=True,
            color_bold=True,
            color_pager=False):
        """Initializes a Config() object."""
        self.config_file = config_file
        self.data_dir = data_dir
        self.log_level = log_level
        self.colors = dict(DEFAULT_COLORS)
        if colors:
            self.colors.update(colors)
        self.color_enabled = color_enabled
        self.color_bold = color_bold
        self.color_pager = color_pager


def write_default_config(config_file, environ):
    """Create a default configuration directory and file if they
    do not already exist.

    Args:
        config_file (str):  the config file location.
        environ (dict):     the process environment.

    """
    if os.path.exists(config_file):
        return
    content = DEFAULT_CONFIG.replace(
        f"data_dir = {DEFAULT_DATA_DIR}",
        f"data_dir = {default_data_dir(environ)}")
    try:
        os.makedirs(os.path.dirname(config_file) or ".", exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as out_file:
            out_file.write(content)
    except OSError as err:
        raise ConfigurationError(
            f"config file {config_file} doesn't exist "
            f"and can't be created: {err}") from err
    logger.info("wrote default config to %s", config_file)


def verify_data_dir(data_dir):
    """Create the data directory if it doesn't exist and check it is
    usable.

    Args:
        data_dir (str): the data directory.

    """
    if not os.path.exists(data_dir):
        try:
            os.makedirs(data_dir)
        except OSError as err:
            raise ConfigurationError(
                f"{data_dir} doesn't exist and can't be created") from err
        logger.info("created data directory %s", data_dir)
    elif not os.path.isdir(data_dir):
        raise ConfigurationError(f"{data_dir} is not a directory")
    elif not os.access(data_dir, os.R_OK | os.W_OK | os.X_OK):
        raise ConfigurationError(
            "You don't have read/write/execute permissions to "
            f"{data_dir}")


def parse_config(config_file, environ):
    """Read and parse the configuration file.

    Args:
        config_file (str):  the config file location.
        environ (dict):     the process environment.

    Returns:
        config (Config):    the resolved settings.

    """
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(config_file, "r", encoding="utf-8") as in_file:
            parser.read_file(in_file)
    except FileNotFoundError as err:
        raise ConfigurationError(
            f"config file {config_file} not found") from err
    except (OSError, configparser.Error) as err:
        raise ConfigurationError(
            f"error reading config file {config_file}: {err}") from err

    data_dir = None
    log_level = DEFAULT_LOG_LEVEL
    if "main" in parser:
        if parser["main"].get("data_dir"):
            data_dir = _expand(parser["main"].get("data_dir"), environ)
        level = parser["main"].get("log_level", DEFAULT_LOG_LEVEL).upper()
        if level in LOG_LEVELS:
            log_level = level
        else:
            logger.warning(
                "unknown log_level '%s', using %s", level, DEFAULT_LOG_LEVEL)

    # the environment wins over the config file
    if environ.get(ENV_DATA_DIR):
        data_dir = _expand(environ[ENV_DATA_DIR], environ)
    if not data_dir:
        raise ConfigurationError(
            f"no data directory: set {ENV_DATA_DIR} or 'data_dir' "
            f"in {config_file}")

    colors = {}
    color_enabled = True
    color_bold = True
    color_pager = False
    if "colors" in parser:
        section = parser["colors"]
        try:
            color_pager = section.getboolean("color_pager", False)
            if section.getboolean("disable_colors", False):
                color_enabled = False
            if section.getboolean("disable_bold", False):
                color_bold = False
        except ValueError as err:
            raise ConfigurationError(
                f"error reading config file {config_file}: {err}") from err
        for element in DEFAULT_COLORS:
            if section.get(element):
                colors[element] = section.get(element)
    if not color_enabled:
        colors = {element: "default" for element in DEFAULT_COLORS}

    return Config(
        config_file,
        data_dir,
        log_level=log_level,
        colors=colors,
        color_enabled=color_enabled,
        color_bold=color_bold,
        color_pager=color_pager)


def load_config(config_file=None, environ=None):
    """Resolve the configuration once, at program start.

    Writes a default config file when none exists, reads it, applies
    the BOOKIT_DIR override and makes sure the data directory is
    usable.

    Args:
        config_file (str):  an explicit config file (optional).
        environ (dict):     the process environment (optional).

    Returns:
        config (Config):    the resolved settings.

    """
    if environ is None:
        environ = dict(os.environ)
    if config_file:
        config_file = _expand(config_file, environ)
    else:
        config_file = default_config_file(environ)
    write_default_config(config_file, environ)
    config = parse_config(config_file, environ)
    verify_data_dir(config.data_dir)
    logger.debug(
        "config %s, data directory %s", config.config_file, config.data_dir)
    return config
