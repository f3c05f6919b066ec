"""Load split options from an XML parameter file.

Expected layout::

    <sections>
      <section name="FastaFileSplitterOptions">
        <item key="SplitCount" value="10" />
        <item key="TargetFastaFileSizeMB" value="100" />
        <item key="UseTargetFileSize" value="False" />
      </section>
    </sections>
"""

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import replace

from fasta_splitter.errors import InvalidParameterFileError, ParameterFileNotFoundError
from fasta_splitter.options import SplitterOptions

logger = logging.getLogger(__name__)

XML_SECTION_OPTIONS = "FastaFileSplitterOptions"


def _parse_bool(value: str) -> bool:
    value = value.strip().lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def read_section(parameter_file_path, section_name: str = XML_SECTION_OPTIONS) -> dict[str, str] | None:
    """Return the key/value items of a section (keys lower-cased), or None if absent."""
    tree = ET.parse(parameter_file_path)
    for section in tree.getroot().iter("section"):
        if section.get("name", "").lower() != section_name.lower():
            continue
        items = {}
        for item in section.iter("item"):
            key = item.get("key")
            if key is not None:
                items[key.lower()] = item.get("value", "")
        return items
    return None


def load_parameter_file(parameter_file_path, options: SplitterOptions) -> SplitterOptions:
    """
    Return a copy of options with values from the parameter file applied.

    An empty path means there is no parameter file. Keys missing from the
    file keep their current values.
    """
    if not parameter_file_path:
        return options

    if not os.path.isfile(parameter_file_path):
        raise ParameterFileNotFoundError(f"Parameter file not found: {parameter_file_path}")

    try:
        items = read_section(parameter_file_path)
    except (ET.ParseError, OSError) as e:
        raise InvalidParameterFileError(f"Could not read parameter file {parameter_file_path}: {e}") from e

    if items is None:
        raise InvalidParameterFileError(
            f'The node \'<section name="{XML_SECTION_OPTIONS}">\' was not found in the parameter file: '
            f"{parameter_file_path}"
        )

    changes = {}
    try:
        if "splitcount" in items:
            changes["split_count"] = int(items["splitcount"])
        if "targetfastafilesizemb" in items:
            changes["target_file_size_mb"] = int(items["targetfastafilesizemb"])
        if "usetargetfilesize" in items:
            changes["use_target_file_size"] = _parse_bool(items["usetargetfilesize"])
        updated = replace(options, **changes)
    except ValueError as e:
        raise InvalidParameterFileError(f"Invalid value in parameter file {parameter_file_path}: {e}") from e

    logger.debug("Loaded options from %s: %s", parameter_file_path, updated)
    return updated
