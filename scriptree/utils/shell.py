"""Sequential execution of shell directives."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


class ShellRunner:
    """Runs directive strings one after another in a shell.

    Each directive starts only after the previous one finished; the first
    non-zero exit raises :class:`subprocess.CalledProcessError` and the
    remaining directives are skipped.
    """

    def __init__(self, *, shell_executable: str | None = None) -> None:
        self.shell_executable = shell_executable

    def run(
        self,
        directives: Sequence[str],
        cwd: str | None = None,
        variables: Mapping[str, str] | None = None,
    ) -> None:
        workdir = self._resolve_cwd(cwd)
        env = os.environ.copy()
        if variables:
            env.update({str(key): str(value) for key, value in variables.items()})

        for directive in directives:
            logger.debug("Executing %r in %s", directive, workdir or os.getcwd())
            subprocess.run(
                directive,
                shell=True,
                check=True,
                cwd=workdir,
                env=env,
                executable=self.shell_executable,
            )

    @staticmethod
    def _resolve_cwd(cwd: str | None) -> Path | None:
        if not cwd:
            return None
        path = Path(os.path.expandvars(cwd)).expanduser()
        if not path.is_dir():
            raise FileNotFoundError(f"Directory does not exist: {path}")
        return path
