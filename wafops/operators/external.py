"""Operator that hands the value to an external program."""

from __future__ import annotations

import subprocess
from typing import Optional

from .base import Operator, Transaction


class InspectFile(Operator):
    """Runs the program named by the argument with the value as its only argument.

    Matches when the program exits with status 0 within the time limit.
    """

    timeout: float = 10.0

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        try:
            result = subprocess.run(
                [self.data, value],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, ValueError, subprocess.TimeoutExpired):
            return False
        return result.returncode == 0