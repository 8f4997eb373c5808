"""Path management utilities for proxy-upgrades library."""

import os
from pathlib import Path
from typing import Optional, Union

from .constants import ARTIFACT_SUFFIX, BUILD_INFO_DIR, DEFAULT_OUT_DIR, OUT_DIR_ENV


def get_out_dir(out_dir: Optional[Union[Path, str]] = None) -> Path:
    """
    Get the compiler output directory.

    Args:
        out_dir: Custom output directory (defaults to $FOUNDRY_OUT, then ./out)

    Returns:
        Absolute path to the output directory
    """
    if out_dir is None:
        out_dir = os.environ.get(OUT_DIR_ENV, DEFAULT_OUT_DIR)
    return Path(out_dir).absolute()


def get_artifact_path(file_name: str, short_name: str, out_dir: Union[Path, str]) -> Path:
    """
    Get the location of a compiled artifact.

    Args:
        file_name: Source file name, e.g. "Greeter.sol"
        short_name: Contract name, e.g. "Greeter"
        out_dir: Compiler output directory

    Returns:
        Path to out_dir/<file_name>/<short_name>.json
    """
    return Path(out_dir) / file_name / f"{short_name}{ARTIFACT_SUFFIX}"


def get_build_info_dir(out_dir: Union[Path, str]) -> Path:
    """Get the build-info directory inside an output directory."""
    return Path(out_dir) / BUILD_INFO_DIR
