"""
Settings module for pssmap.

All settings are stored in a benchbuild configuration object. Each setting can
be modified via environment variable, e.g.,
``PSSMAP_MAPPER_VARIABLE_REGEX``.
"""
import os
import typing as tp
from os import makedirs, path

import benchbuild.utils.settings as s
from plumbum import LocalPath


def create_new_pssmap_config() -> s.Configuration:
    """
    Create a new default (uninitialized) pssmap config.

    For internal use only! If you want to access the current pssmap config, use
    :func:`pss_cfg()` instead.

    Returns:
        a new default pssmap config object
    """
    cfg = s.Configuration(
        "pssmap",
        node={
            "config_file": {
                "desc": "Config file path of pssmap. Not guaranteed to exist.",
                "default": None,
            },
        }
    )

    cfg["mapper"] = {
        "variable_regex": {
            "desc":
                "Regular expression identifying variability variables in "
                "build and code artifacts. If not specified, all variables "
                "are considered to be variability variables.",
            "default": None,
        },
    }

    cfg["tables"] = {
        "table_format": {
            "desc": "Default format used to render mapping tables.",
            "default": "simple",
        },
        "table_dir": {
            "desc": "Folder for generated mapping tables",
            "default": os.getcwd() + "/tables",
        },
    }

    return cfg


_CFG: tp.Optional[s.Configuration] = None


def pss_cfg() -> s.Configuration:
    """Get the current pssmap config."""
    global _CFG  # pylint: disable=global-statement
    if not _CFG:
        _CFG = create_new_pssmap_config()
        s.setup_config(
            _CFG, ['.pssmap.yaml', '.pssmap.yml'], "PSSMAP_CONFIG_FILE"
        )
        s.update_env(_CFG)
    return _CFG


def reset_config() -> None:
    """Drop the loaded config, the next :func:`pss_cfg()` call reloads it."""
    global _CFG  # pylint: disable=global-statement
    _CFG = None


def get_value_or_default(
    cfg: s.Configuration, varname: str, default: tp.Any
) -> tp.Any:
    """
    Checks if the config variable has a value and if it is not None.

    Then the value is returned. Otherwise, the default value is set and then
    returned.
    """
    config_node = cfg[varname]
    if not config_node.has_value() or config_node.value is None:
        cfg[varname] = default
    return config_node.value


def create_missing_folders() -> None:
    """Create folders that do not exist but were set in the config."""
    config_node = pss_cfg()["tables"]["table_dir"]
    if config_node.has_value() and config_node.value is not None and \
            not path.isdir(config_node.value):
        makedirs(config_node.value)


def save_config() -> None:
    """Persist pssmap config to a yaml file."""
    if pss_cfg()["config_file"].value is None:
        config_file = ".pssmap.yaml"
    else:
        config_file = str(pss_cfg()["config_file"])

    pss_cfg()["config_file"] = path.abspath(config_file)
    create_missing_folders()
    pss_cfg().store(LocalPath(config_file))
