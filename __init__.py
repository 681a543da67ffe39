from __future__ import annotations

# Compatibility shim so ``import cssfinder`` works from the repository root.
# The package lives in a src-layout at ``src/cssfinder``. When Python is started
# from the parent folder it would otherwise treat this checkout as a namespace
# package and miss the submodules.

from pathlib import Path

__version__ = "0.1.0"

_repo_pkg_dir = Path(__file__).resolve().parent
_src_pkg_dir = _repo_pkg_dir / "src" / "cssfinder"
if _src_pkg_dir.is_dir():
    src_path = str(_src_pkg_dir)
    if src_path not in __path__:
        __path__.append(src_path)
