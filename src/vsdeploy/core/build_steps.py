from __future__ import annotations

"""
Build Event Editor.

Appends and removes command fragments in the pre/post build event
properties of a project configuration. Both operations are keyed on plain
substring containment, so a command that is a substring of another one is
treated as already present.
"""

import logging
from typing import Optional

from vsdeploy.domain.errors import SlotUnavailable
from vsdeploy.domain.host_models import SlotTarget
from vsdeploy.domain.sync_models import BuildStepSlot

logger = logging.getLogger(__name__)


def add_build_step(target: SlotTarget, slot: object, command: str) -> bool:
    """
    Append 'command' to a build event slot unless it is already contained.

    Args:
        target: Object exposing the build event properties.
        slot: BuildStepSlot member or a loose name ('Pre', 'Post').
        command: Command fragment to append.

    Returns:
        bool: True if the slot text changed.
    """
    resolved = _resolve_slot(slot)
    if resolved is None or not command:
        return False

    try:
        current = target.get_property(resolved.property_name) or ""
        if command in current:
            logger.debug(f"{resolved.property_name} already contains the command.")
            return False
        target.set_property(resolved.property_name, current + command)
    except SlotUnavailable as e:
        logger.warning(f"Cannot add build step: {e}")
        return False

    logger.info(f"Added command to {resolved.property_name}.")
    return True


def remove_build_step(target: SlotTarget, slot: object, command: str) -> bool:
    """
    Remove every occurrence of 'command' from a build event slot.

    Args:
        target: Object exposing the build event properties.
        slot: BuildStepSlot member or a loose name ('Pre', 'Post').
        command: Command fragment to strip.

    Returns:
        bool: True if the slot text changed.
    """
    resolved = _resolve_slot(slot)
    if resolved is None or not command:
        return False

    try:
        current = target.get_property(resolved.property_name) or ""
        if command not in current:
            return False
        target.set_property(resolved.property_name, current.replace(command, ""))
    except SlotUnavailable as e:
        logger.warning(f"Cannot remove build step: {e}")
        return False

    logger.info(f"Removed command from {resolved.property_name}.")
    return True


def _resolve_slot(slot: object) -> Optional[BuildStepSlot]:
    resolved = BuildStepSlot.parse(slot)
    if resolved is None:
        logger.warning(f"Unknown build event slot '{slot}'; expected 'Pre' or 'Post'.")
    return resolved
