import yaml
from pathlib import Path

from splittt.errors import ConfigurationError

KNOWN_SETTINGS = {
    "workers": int,
    "overwrite": bool,
    "show_progress": bool,
}


def load_settings(yaml_path, required: bool = False) -> dict:
    """
    Load the YAML settings file and return the validated values.

    Args:
        yaml_path (str | Path): Path to the YAML file.
        required (bool): Raise if the file is missing instead of returning {}.

    Returns:
        dict: Settings keyed by name, only the keys present in the file.
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.is_file():
        if required:
            raise ConfigurationError(f"Settings file not found: {yaml_path}")
        return {}
    with open(yaml_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid settings file {yaml_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings file must contain a mapping: {yaml_path}"
        )

    unknown = sorted(set(data) - set(KNOWN_SETTINGS))
    if unknown:
        raise ConfigurationError(
            f"Unknown settings in {yaml_path}: {', '.join(unknown)}"
        )

    for key, expected in KNOWN_SETTINGS.items():
        # bool is a subclass of int, reject it where a count is expected
        if key in data and (
            not isinstance(data[key], expected)
            or (expected is int and isinstance(data[key], bool))
        ):
            raise ConfigurationError(
                f"Setting '{key}' must be {expected.__name__}, got {data[key]!r}"
            )

    if "workers" in data and data["workers"] < 1:
        raise ConfigurationError("Setting 'workers' must be at least 1.")
    return data
