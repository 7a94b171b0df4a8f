"""Default values for termtree terms and configuration."""

# Namespace alias applied to term paths when none is configured
DEFAULT_NAMESPACE_PREFIX = "oxns"

DEFAULT_DATA_TYPE = "string"

# Settings every builder starts with
DEFAULT_TERM_SETTINGS: dict[str, bool | str] = {
    "required": False,
    "data_type": DEFAULT_DATA_TYPE,
}

USER_CONFIG_DIR = ".termtree"
USER_CONFIG_NAMES = ("config.yml", "config.yaml")
PROJECT_CONFIG_NAMES = ("termtree.yml", "termtree.yaml")
