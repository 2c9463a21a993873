"""
Eclipse formatter profile loading.

Reads an Eclipse-exported formatter profile (XML) into FormatterSettings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

from lxml import etree

from .errors import ConfigParseError, PathNotFoundError
from .logging_utils import LOG
from .shared import FormatterSettings

TAB_CHAR_KEY = "org.eclipse.jdt.core.formatter.tabulation.char"
TAB_SIZE_KEY = "org.eclipse.jdt.core.formatter.tabulation.size"
INDENTATION_SIZE_KEY = "org.eclipse.jdt.core.formatter.indentation.size"

DEFAULT_SETTINGS: Dict[str, str] = {
    TAB_CHAR_KEY: "mixed",
    TAB_SIZE_KEY: "4",
    INDENTATION_SIZE_KEY: "4",
}


def _make_parser() -> etree.XMLParser:
    # Profiles are plain data; never fetch DTDs or expand external entities
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


def parse_settings(root: etree._Element) -> Dict[str, str]:
    """
    Collect every <setting id=".." value=".."/> element under ``root``.

    Profiles exported from Eclipse nest settings inside <profile>
    elements; all of them are read. When an id appears more than once
    the last value wins.
    """
    settings: Dict[str, str] = {}
    for setting in root.iter("setting"):
        settings[setting.get("id", "")] = setting.get("value", "")
    return settings


def load_settings(config_path: Union[str, Path]) -> FormatterSettings:
    """
    Load formatter settings from an Eclipse XML profile.

    Defaults for tab character, tab size and indentation size are added
    only when the profile does not set them.

    Args:
        config_path: Path to the XML profile

    Returns:
        FormatterSettings with the loaded values and defaults

    Raises:
        PathNotFoundError: If the file does not exist
        ConfigParseError: If the file cannot be read or is not well-formed XML
    """
    path = Path(config_path)
    if not path.is_file():
        raise PathNotFoundError(f"Config file not found: {path.absolute()}")

    try:
        tree = etree.parse(str(path), _make_parser())
    except (etree.XMLSyntaxError, OSError) as e:
        raise ConfigParseError(
            f"Failed to parse Eclipse formatter configuration: {e}"
        ) from e

    loaded = parse_settings(tree.getroot())
    LOG.debug("Loaded Eclipse formatter configuration from %s", path.absolute())
    LOG.debug("Loaded %d formatter settings", len(loaded))

    values = dict(loaded)
    for key, value in DEFAULT_SETTINGS.items():
        values.setdefault(key, value)

    return FormatterSettings(values=values, source=path)
