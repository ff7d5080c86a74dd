from __future__ import annotations

"""
Domain Constants.

Centralizes the MSBuild property names, placeholder tokens and default
values shared by the synchronization and build-step services.
"""

from typing import Dict

CURRENT_CONFIG_VERSION = "1.0.0"
APP_NAME = "vsdeploy"

# Glob applied to source file names when no filter is given
DEFAULT_PATTERN = "*"

# -----------------------------------------------------------------------------
# MSBUILD PLACEHOLDERS
# -----------------------------------------------------------------------------

# Both macros expand with a trailing backslash at build time
SOLUTION_DIR_TOKEN = "$(SolutionDir)"
TARGET_DIR_TOKEN = "$(TargetDir)"

# -----------------------------------------------------------------------------
# BUILD EVENT PROPERTIES
# -----------------------------------------------------------------------------

PRE_BUILD_PROPERTY = "PreBuildEvent"
POST_BUILD_PROPERTY = "PostBuildEvent"

SLOT_ALIASES: Dict[str, str] = {
    "pre": "PRE",
    "prebuild": "PRE",
    "prebuildevent": "PRE",
    "post": "POST",
    "postbuild": "POST",
    "postbuildevent": "POST",
}

MSBUILD_NAMESPACE = "http://schemas.microsoft.com/developer/msbuild/2003"
