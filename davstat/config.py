import json
import logging
import os

"""
Config file handling.  A config file is a JSON (or YAML, if pyyaml is
installed) dict of sections, like this:

    {
        "default": {"strict": false},
        "nextcloud": {"inherits": "default", "text_properties": ["comments-count"]}
    }

The keys understood in a section are listed in PARSER_OPTIONS.
"""

PARSER_OPTIONS = ("huge_tree", "strict", "text_properties")


def config_section(config, section="default"):
    if section in config and "inherits" in config[section]:
        ret = config_section(config, config[section]["inherits"])
    else:
        ret = {}
    if section in config:
        ret.update(config[section])
    return ret


def parser_options(config, section="default"):
    """
    The keyword arguments for DAVResultParser found in a config section.
    Unknown keys are ignored, with a warning.
    """
    found = config_section(config, section)
    options = {}
    for key, value in found.items():
        if key in PARSER_OPTIONS:
            options[key] = value
        elif key != "inherits":
            logging.warning(f"unknown key {key} in config section {section} ignored")
    if isinstance(options.get("text_properties"), str):
        options["text_properties"] = [options["text_properties"]]
    return options


def read_config(fn):
    if not fn:
        fn = os.environ.get("DAVSTAT_CONFIG_FILE")
    if not fn:
        cfgdir = f"{os.environ.get('HOME', '/')}/.config/"
        for config_file in (
            f"{cfgdir}/davstat/davstat.conf",
            f"{cfgdir}/davstat/davstat.yaml",
            f"{cfgdir}/davstat/davstat.json",
            "/etc/davstat.conf",
        ):
            cfg = read_config(config_file)
            if cfg:
                return cfg
        return None

    try:
        try:
            with open(fn, "rb") as config_file:
                return json.load(config_file)
        except json.decoder.JSONDecodeError:
            ## Late import, wrapped in try/except.  yaml is external module,
            ## and not included in the requirements.
            try:
                import yaml

                try:
                    with open(fn, "rb") as config_file:
                        return yaml.load(config_file, yaml.SafeLoader)
                except yaml.YAMLError:
                    logging.error(
                        f"config file {fn} exists but is neither valid json nor yaml.  Check the syntax."
                    )
            except ImportError:
                logging.error(
                    f"config file {fn} exists but is not valid json, and pyyaml is not installed."
                )

    except FileNotFoundError:
        logging.info("no config file found")
    except ValueError:
        logging.error("error in config file.  It will be ignored", exc_info=True)
    return {}
