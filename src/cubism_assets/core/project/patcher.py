from __future__ import annotations

"""
Build Project Descriptor Patcher.

Makes sure unsafe code is allowed in the generated runtime projects: every
'*.csproj' in the working directory (editor assemblies excluded) gets an
AllowUnsafeBlocks element forced to 'true' in each configuration-scoped
PropertyGroup. Runs when the host reports that project files were
(re)generated.

The rewrite keeps comments, element order, attribute order, the default
namespace, the XML declaration and its encoding, a UTF-8 BOM and the line
ending style of the original file. Patching an already patched file yields
identical bytes.
"""

import codecs
import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple
from xml.etree import ElementTree as ET

from cubism_assets.core.project.structure import (
    children_named,
    ensure_child_named,
    is_element,
    namespace_prefix,
    section_matches,
    set_scalar_value,
)
from cubism_assets.domain import constants as const
from cubism_assets.domain.patch_models import PatchError, PatchResult
from cubism_assets.infra.fs import list_files_matching_suffix

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"
_DEFAULT_ENCODING = "utf-8"
_DECLARED_ENCODING = re.compile(rb"""\s*<\?xml[^>]*?\bencoding\s*=\s*["']([A-Za-z][A-Za-z0-9._-]*)["']""")


@dataclass(frozen=True)
class _DocumentFormat:
    """Byte-level traits of a descriptor that the tree model does not keep."""
    bom: bool
    declaration: bool
    encoding: str
    newline: str
    trailing_newline: bool


# ==============================================================================
# PUBLIC API
# ==============================================================================

def patch_all_project_files(directory: str) -> PatchResult:
    """
    Patch every non-editor project descriptor at the top level of a directory.

    Args:
        directory: Working directory holding the generated descriptors.

    Returns:
        PatchResult: Patched, excluded and unparseable files.

    Raises:
        OSError: If the directory cannot be listed or a descriptor cannot be
                 written back.
    """
    patched: List[str] = []
    excluded: List[str] = []
    errors: List[PatchError] = []
    sections = 0

    for path in list_files_matching_suffix(directory, const.PROJECT_FILE_SUFFIX):
        if path.endswith(const.EDITOR_PROJECT_SUFFIX):
            excluded.append(path)
            continue

        try:
            sections += patch_project_file(path)
        except (ET.ParseError, ValueError, LookupError) as e:
            # ValueError covers UnicodeError raised while encoding the rewrite
            logger.error(f"Skipping unreadable project file '{path}': {e}")
            errors.append(PatchError(path=path, error=str(e)))
            continue

        patched.append(path)

    logger.info(f"Project files patched: {len(patched)} ({sections} sections), {len(excluded)} excluded.")
    return PatchResult(patched=patched, excluded=excluded, sections=sections, errors=errors)


def patch_project_file(path: str) -> int:
    """
    Parse, patch and overwrite a single descriptor.

    Args:
        path: Descriptor file path.

    Returns:
        int: Number of qualifying sections.

    Raises:
        ET.ParseError: If the file is not well-formed XML.
        LookupError: If the declared encoding is unknown.
        ValueError: If the patched document cannot be encoded back.
        OSError: If the file cannot be read or written.
    """
    root, fmt = load_descriptor(path)
    count = patch_descriptor(root)
    save_descriptor(root, path, fmt)
    logger.debug(f"Patched {count} section(s) in {path}")
    return count


def patch_descriptor(
        root: ET.Element,
        flag_name: str = const.UNSAFE_FLAG_NAME,
        value: str = const.FLAG_TRUE_VALUE,
        markers: Sequence[str] = const.SECTION_MARKERS,
) -> int:
    """
    Force a flag element to a value in every qualifying top-level section.

    The value is written on every call, so a flag set to anything else
    converges back to 'value'. Duplicate flag elements are all overwritten.

    Args:
        root: Document root element.
        flag_name: Local name of the flag element.
        value: Text value to force.
        markers: Substrings a section's serialized form must all contain.

    Returns:
        int: Number of qualifying sections.
    """
    count = 0
    for section in list(root):
        if not is_element(section) or not section_matches(section, markers):
            continue

        ensure_child_named(section, flag_name)
        for flag in children_named(section, flag_name):
            set_scalar_value(flag, value)
        count += 1

    return count

# ==============================================================================
# DOCUMENT I/O
# ==============================================================================

def load_descriptor(path: str) -> Tuple[ET.Element, _DocumentFormat]:
    """
    Parse a descriptor, keeping comments, and record its byte-level format.

    The raw bytes go to expat, which decodes them with the encoding named in
    the XML declaration (UTF-8 when there is none).

    Raises:
        ET.ParseError: If the file is not well-formed in its declared encoding.
        LookupError: If the declared encoding is unknown.
        OSError: If the file cannot be read.
    """
    with open(path, "rb") as f:
        raw = f.read()

    bom = raw.startswith(_UTF8_BOM)
    if bom:
        raw = raw[len(_UTF8_BOM):]

    match = _DECLARED_ENCODING.match(raw)
    encoding = match.group(1).decode("ascii") if match else _DEFAULT_ENCODING
    codecs.lookup(encoding)

    fmt = _DocumentFormat(
        bom=bom,
        declaration=raw.lstrip().startswith(b"<?xml"),
        encoding=encoding,
        newline="\r\n" if b"\r\n" in raw else "\n",
        trailing_newline=raw.endswith(b"\n"),
    )

    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
    parser.feed(raw)
    root = parser.close()
    return root, fmt


def save_descriptor(root: ET.Element, path: str, fmt: _DocumentFormat) -> None:
    """
    Serialize the tree back to 'path' in the recorded format.

    The document is fully encoded before the file is opened, so an encoding
    failure leaves the original file untouched.
    """
    ns = namespace_prefix(root.tag)
    if ns:
        # Keep the namespace as the default one instead of an 'ns0:' prefix
        ET.register_namespace("", ns[1:-1])

    body = ET.tostring(root, encoding="unicode")
    declaration = f'<?xml version="1.0" encoding="{fmt.encoding}"?>\n' if fmt.declaration else ""
    content = declaration + body
    if fmt.trailing_newline:
        content += "\n"
    if fmt.newline != "\n":
        content = content.replace("\n", fmt.newline)

    data = content.encode(fmt.encoding)
    if fmt.bom:
        data = _UTF8_BOM + data

    with open(path, "wb") as f:
        f.write(data)
