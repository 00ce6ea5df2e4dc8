"""Version of the running poolgen."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

# Present when running from a source checkout
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Return the checkout's version if there is one, else the installed distribution's."""
    if _PYPROJECT.is_file():
        with open(_PYPROJECT, "rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "poolgen" and "version" in project:
            return project["version"]
    try:
        return version("poolgen")
    except PackageNotFoundError:
        return "0.0.0"
