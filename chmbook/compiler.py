"""Locate and run the HTML Help Workshop compiler (hhc.exe)."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Mapping, Sequence

from .errors import CompilerNotFoundError

logger = logging.getLogger(__name__)

COMPILER_NAMES = ("hhc.exe", "hhc")
DEFAULT_INSTALL_PATH = Path("C:/Program Files (x86)/HTML Help Workshop/hhc.exe")
ENV_VARIABLE = "CHM_COMPILER"
SUCCESS_STATUS = 1

NOT_FOUND_MESSAGE = (
    "Compiler not found. Please install HTML Help Workshop, "
    f"or point the {ENV_VARIABLE} environment variable at hhc.exe."
)

CompilerRunner = Callable[[Sequence[str]], int]


def find_compiler(
    *,
    environ: Mapping[str, str] | None = None,
    which: Callable[[str], str | None] = shutil.which,
    install_path: Path = DEFAULT_INSTALL_PATH,
) -> Path | None:
    """Search the PATH, then the default install location, then ``CHM_COMPILER``."""
    for name in COMPILER_NAMES:
        found = which(name)
        if found:
            logger.debug("Found compiler on PATH: %s", found)
            return Path(found)

    if install_path.exists():
        logger.debug("Found compiler at %s", install_path)
        return install_path

    env = os.environ if environ is None else environ
    override = env.get(ENV_VARIABLE)
    if override:
        candidate = Path(override)
        if candidate.exists():
            logger.debug("Found compiler via %s: %s", ENV_VARIABLE, candidate)
            return candidate
        logger.debug("%s points at missing file %s", ENV_VARIABLE, candidate)

    return None


def run_compiler(
    project_path: Path,
    *,
    compiler: Path | None = None,
    runner: CompilerRunner | None = None,
) -> int:
    """Compile ``project_path`` and wait for the compiler to exit.

    The child inherits this process's console. Its exit status is returned
    without being interpreted. hhc.exe reports success as 1, any
    other status is logged as a warning.
    """
    executable = compiler or find_compiler()
    if executable is None:
        raise CompilerNotFoundError(NOT_FOUND_MESSAGE)

    command = [str(executable), str(project_path)]
    exec_runner = runner or subprocess.call
    logger.info("Compiling %s with %s", project_path, executable)
    try:
        status = exec_runner(command)
    except FileNotFoundError as exc:
        raise CompilerNotFoundError(NOT_FOUND_MESSAGE) from exc
    if status == SUCCESS_STATUS:
        logger.info("Compiler exited with status %s", status)
    else:
        logger.warning("Compiler exited with status %s", status)
    return status
