from __future__ import annotations

"""
Structure Definition Parser.

Turns the XML structure definition into an immutable SchemaNode tree.
Attributes are looked up by name, so their order in the document does not
matter. Unknown elements are skipped; only a missing, unparseable or
misrooted document (or an entry without a name) is rejected.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Tuple, Union

from repostruct.domain.constants import (
    ALLOW_OTHER_ATTRIBUTE,
    CLOSED_VALUE,
    DIRECTORY_ELEMENT,
    FILE_ELEMENT,
    NAME_ATTRIBUTE,
    ROOT_ELEMENT,
)
from repostruct.domain.errors import SchemaError
from repostruct.domain.schema_models import NodeKind, SchemaNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_schema(source: Union[str, bytes]) -> SchemaNode:
    """
    Parse an XML structure definition.

    Args:
        source: XML document text or raw bytes.

    Returns:
        SchemaNode: Root directory node of the expected structure.

    Raises:
        SchemaError: If the source is empty, malformed, or its root element
            is not the expected root marker.
    """
    if not source or not source.strip():
        raise SchemaError("Structure definition is empty.")

    try:
        root_el = ET.fromstring(source)
    except ET.ParseError as e:
        raise SchemaError(f"Structure definition is not valid XML: {e}") from e

    if root_el.tag != ROOT_ELEMENT:
        raise SchemaError(
            f"Incorrect root element '{root_el.tag}', expected '{ROOT_ELEMENT}'."
        )

    root = SchemaNode(
        kind=NodeKind.DIRECTORY,
        name_pattern=ROOT_ELEMENT,
        children=_parse_children(root_el),
    )
    logger.debug(f"Parsed structure definition with {sum(1 for _ in root.walk()) - 1} entries.")
    return root


def load_schema(path: str) -> SchemaNode:
    """
    Read and parse a structure definition file.

    Args:
        path: Path to the XML file.

    Returns:
        SchemaNode: Root directory node.

    Raises:
        SchemaError: If the file cannot be read or its content is invalid.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise SchemaError(f"Cannot read structure definition '{path}': {e}") from e

    logger.info(f"Loading structure definition: {path}")
    # Raw bytes let the parser honor the encoding declaration
    return parse_schema(raw)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _parse_children(parent: ET.Element) -> Tuple[SchemaNode, ...]:
    """Convert the recognized child elements of 'parent', in document order."""
    nodes: List[SchemaNode] = []
    for el in parent:
        if el.tag == DIRECTORY_ELEMENT:
            nodes.append(SchemaNode(
                kind=NodeKind.DIRECTORY,
                name_pattern=_require_name(el),
                allow_other_entries=_allows_other_entries(el),
                children=_parse_children(el),
            ))
        elif el.tag == FILE_ELEMENT:
            if len(el):
                logger.warning(f"Nested elements under file '{el.get(NAME_ATTRIBUTE)}' are ignored.")
            nodes.append(SchemaNode(kind=NodeKind.FILE, name_pattern=_require_name(el)))
        else:
            logger.debug(f"Ignoring unknown element '{el.tag}'.")
    return tuple(nodes)


def _require_name(el: ET.Element) -> str:
    name = el.get(NAME_ATTRIBUTE)
    if name is None or not name.strip():
        raise SchemaError(f"Element '{el.tag}' is missing the '{NAME_ATTRIBUTE}' attribute.")
    return name


def _allows_other_entries(el: ET.Element) -> bool:
    value: Optional[str] = el.get(ALLOW_OTHER_ATTRIBUTE)
    return not (value is not None and value.strip() == CLOSED_VALUE)

