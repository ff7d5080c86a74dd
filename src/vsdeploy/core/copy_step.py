from __future__ import annotations

"""
Build-Time Copy Command Generator.

Produces the batch fragment that copies a package's native binaries into the
build output directory. The fragment is expressed in MSBuild macros, which
are expanded by the build, never here.
"""

import ntpath

from vsdeploy.domain.constants import SOLUTION_DIR_TOKEN, TARGET_DIR_TOKEN

# Build events are executed by cmd.exe
LINE_SEPARATOR = "\r\n"


def generate_copy_step(
        install_root: str,
        solution_root: str,
        source_subpath: str,
        target_subpath: str,
        *,
        solution_dir_token: str = SOLUTION_DIR_TOKEN,
        target_dir_token: str = TARGET_DIR_TOKEN,
) -> str:
    """
    Build a two-line command that recursively copies package files at build time.

    The solution root prefix of 'install_root' is replaced by the solution
    directory macro so the command survives a relocation of the solution.
    The output looks like::

        if not exist "$(TargetDir)bin" md "$(TargetDir)bin"
        xcopy /s /y "$(SolutionDir)pkg\\tools\\native\\*.*" "$(TargetDir)bin"

    Args:
        install_root: Directory the package was installed to.
        solution_root: Directory of the solution file.
        source_subpath: Folder under 'install_root' holding the files to copy.
        target_subpath: Folder under the build output receiving them.
        solution_dir_token: Macro standing for the solution directory.
        target_dir_token: Macro standing for the build output directory.

    Returns:
        str: The command fragment, lines joined with CRLF.
    """
    install = relocate_to_solution(install_root, solution_root, solution_dir_token)
    if install == solution_dir_token:
        source = install + _windows_join("", source_subpath, "*.*")
    else:
        source = _windows_join(install, source_subpath, "*.*")
    target = target_dir_token + _to_windows(target_subpath).strip("\\")

    lines = [
        f'if not exist "{target}" md "{target}"',
        f'xcopy /s /y "{source}" "{target}"',
    ]
    return LINE_SEPARATOR.join(lines)


def relocate_to_solution(install_root: str, solution_root: str, token: str = SOLUTION_DIR_TOKEN) -> str:
    """
    Replace a leading 'solution_root' in 'install_root' with 'token'.

    Matching is case-insensitive and accepts either separator style. The
    token already ends with a separator, so the one after the root is dropped.
    Paths outside the solution are returned unchanged (Windows separators).
    """
    install = _to_windows(install_root)
    solution = _to_windows(solution_root).rstrip("\\")

    if not solution:
        return install

    if ntpath.normcase(install) == ntpath.normcase(solution):
        return token

    prefix = solution + "\\"
    if ntpath.normcase(install).startswith(ntpath.normcase(prefix)):
        return token + install[len(prefix):]
    return install


def _to_windows(path: str) -> str:
    return (path or "").replace("/", "\\")


def _windows_join(base: str, *parts: str) -> str:
    out = base
    for part in parts:
        part = _to_windows(part).strip("\\")
        if not part:
            continue
        if not out or out.endswith("\\"):
            out += part
        else:
            out += "\\" + part
    return out
