from __future__ import annotations

"""
MSBuild Project File Target.

Reads and writes the PreBuildEvent / PostBuildEvent properties of a project
file. Managed projects (.csproj, .vbproj) keep the command text directly in
a PropertyGroup element; C++ projects (.vcxproj) keep it in the Command
child of an ItemDefinitionGroup element.

Everything else in the file is written back as it was read: comments, the
prolog (XML declaration, BOM), the line ending style and the indentation of
existing elements.
"""

import logging
import os
import re
import xml.etree.ElementTree as ET
from typing import Optional

from vsdeploy.domain.constants import (
    MSBUILD_NAMESPACE,
    POST_BUILD_PROPERTY,
    PRE_BUILD_PROPERTY,
)
from vsdeploy.domain.errors import HostRejected, SlotUnavailable
from vsdeploy.domain.host_models import SlotTarget

logger = logging.getLogger(__name__)

_EXPOSED = (PRE_BUILD_PROPERTY, POST_BUILD_PROPERTY)
_DEFAULT_INDENT = "  "

# Declaration, comments and whitespace ahead of the root element
_PROLOG_RE = re.compile(r"(?:\s|<\?.*?\?>|<!--.*?-->)*", re.DOTALL)

ET.register_namespace("", MSBUILD_NAMESPACE)


class ProjectFileTarget(SlotTarget):
    """
    Build event slots of an MSBuild project file.

    Changes stay in memory until save() is called. XML parsing folds CRLF
    into LF, so line breaks are stored as LF and exposed as CRLF, the
    convention of build event text.

    When a property is defined more than once, the last definition is the
    one read and written, as it is the one MSBuild evaluates last. For C++
    projects with one ItemDefinitionGroup per configuration (Debug|Win32,
    Release|x64, ...) this means only the last configuration's event is
    edited; the other configurations are left untouched.
    """

    def __init__(self, path: str):
        self.path = os.path.abspath(path)
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
            text = raw.decode("utf-8-sig")
            parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
            parser.feed(text)
            root = parser.close()
        except (OSError, UnicodeDecodeError, ET.ParseError) as e:
            raise HostRejected("load project", self.path, e) from e

        self._tree = ET.ElementTree(root)
        self._bom = raw.startswith(b"\xef\xbb\xbf")
        self._newline = "\r\n" if b"\r\n" in raw else "\n"
        self._prolog = _PROLOG_RE.match(text).group(0)
        self._epilog = text[len(text.rstrip()):]
        self._indent = _indent_unit(root)

        self._ns = root.tag[: root.tag.index("}") + 1] if root.tag.startswith("{") else ""
        self._native = self.path.lower().endswith(".vcxproj")
        self.dirty = False

    def get_property(self, name: str) -> str:
        node = self._find(name)
        if node is None:
            return ""
        return _to_crlf(node.text or "")

    def set_property(self, name: str, value: str) -> None:
        node = self._find(name)
        if node is None:
            node = self._create(name)
        node.text = _to_lf(value)
        self.dirty = True

    def save(self) -> None:
        """Write the project back to disk if anything changed."""
        if not self.dirty:
            return

        body = ET.tostring(self._tree.getroot(), encoding="unicode")
        if self._newline != "\n":
            body = body.replace("\n", self._newline)
        content = self._prolog + body + self._epilog

        try:
            with open(self.path, "w", encoding="utf-8-sig" if self._bom else "utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise HostRejected("save project", self.path, e) from e
        self.dirty = False
        logger.debug(f"Project saved: {self.path}")

    # -------------------------------------------------------------------------
    # Element lookup
    # -------------------------------------------------------------------------

    def _tag(self, local: str) -> str:
        return self._ns + local

    def _find(self, name: str) -> Optional[ET.Element]:
        if name not in _EXPOSED:
            raise SlotUnavailable(name)

        root = self._tree.getroot()
        if self._native:
            path = f"{self._tag('ItemDefinitionGroup')}/{self._tag(name)}/{self._tag('Command')}"
        else:
            path = f"{self._tag('PropertyGroup')}/{self._tag(name)}"

        matches = root.findall(path)
        # The last definition wins in MSBuild evaluation
        return matches[-1] if matches else None

    def _create(self, name: str) -> ET.Element:
        root = self._tree.getroot()
        step = self._indent
        if self._native:
            group = _append_indented(root, self._tag("ItemDefinitionGroup"), "\n", step)
            event = _append_indented(group, self._tag(name), "\n" + step, step)
            return _append_indented(event, self._tag("Command"), "\n" + step * 2, step)

        group = _append_indented(root, self._tag("PropertyGroup"), "\n", step)
        return _append_indented(group, self._tag(name), "\n" + step, step)


def _append_indented(parent: ET.Element, tag: str, parent_indent: str, step: str) -> ET.Element:
    """
    Append a child laid out like the rest of the file.

    Args:
        parent: Element receiving the child.
        tag: Qualified tag of the new child.
        parent_indent: Whitespace (newline included) in front of 'parent'.
        step: One indentation level.

    Returns:
        ET.Element: The new child.
    """
    child_indent = parent_indent + step
    children = list(parent)
    if children:
        children[-1].tail = child_indent
    else:
        parent.text = child_indent
    child = ET.SubElement(parent, tag)
    child.tail = parent_indent
    return child


def _indent_unit(root: ET.Element) -> str:
    lead = root.text or ""
    if lead.strip():
        return _DEFAULT_INDENT
    unit = lead.rsplit("\n", 1)[-1]
    return unit or _DEFAULT_INDENT


def _to_lf(text: str) -> str:
    return text.replace("\r\n", "\n")


def _to_crlf(text: str) -> str:
    return _to_lf(text).replace("\n", "\r\n")
