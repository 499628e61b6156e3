"""Apply the enabled checks to every file under a source root."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from .config import CheckConfig
from .errors import CheckError, ConfigurationError, SourceReadError
from .logging import get_logger
from .result import FileResult, RunResult
from .rules import Check
from .rules.line_length import LineLengthCheck
from .rules.newline import NewlineCheck
from .rules.param_count import ParamCountCheck
from .rules.todo import TodoCheck
from .rules.unused_imports import UnusedImportCheck
from .utils import find_source_files, read_source_file


class RunState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    CHECKING = "checking"
    AGGREGATING = "aggregating"
    DONE = "done"


def load_checks() -> List[Check]:
    return [
        NewlineCheck(),
        LineLengthCheck(),
        TodoCheck(),
        ParamCountCheck(),
        UnusedImportCheck(),
    ]


class CheckRunner:
    """Scan a source root and aggregate per-file results.

    Every violation is logged once at warning level on ``log``; the run ends
    with a single info summary line. A file that cannot be read, or a check
    that cannot run, is logged and isolated so the remaining work continues.
    """

    def __init__(
        self,
        root: Path,
        config: CheckConfig,
        log: Optional[logging.Logger] = None,
        checks: Optional[Sequence[Check]] = None,
        jobs: int = 1,
    ) -> None:
        if jobs < 1:
            raise ConfigurationError(f"jobs must be at least 1, got {jobs}")
        self._root = Path(root)
        self._config = config
        self._log = log or get_logger()
        all_checks = load_checks() if checks is None else list(checks)
        self._checks = [check for check in all_checks if check.enabled(config)]
        self._jobs = jobs
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def enabled_checks(self) -> List[str]:
        return [check.name for check in self._checks]

    def run(self) -> RunResult:
        result = RunResult(root=self._root)

        self._transition(RunState.SCANNING)
        try:
            files = find_source_files(self._root)
        except ConfigurationError as exc:
            self._log.warning("%s", exc)
            return self._finish(result)
        self._log.info("Scanning code for issues in: %s", self._root.absolute())
        self._log.debug("Files: %s", [str(path) for path in files])

        self._transition(RunState.CHECKING)
        if self._jobs > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=self._jobs) as executor:
                file_results = list(executor.map(self.check_file, files))
        else:
            file_results = [self.check_file(path) for path in files]

        self._transition(RunState.AGGREGATING)
        result.files.extend(file_results)
        return self._finish(result)

    def check_file(self, path: Path) -> FileResult:
        """Run every enabled check against one file."""

        file_result = FileResult(path=path)
        try:
            source = read_source_file(path)
        except SourceReadError as exc:
            self._log.error("%s", exc)
            file_result.errors.append(str(exc))
            return file_result

        violations_found = False
        for check in self._checks:
            check_found = False
            try:
                for violation in check.scan(source, self._config):
                    self._log.log(violation.severity.log_level, "%s: %s", violation.location, violation.message)
                    file_result.violations.append(violation)
                    check_found = True
            except CheckError as exc:
                self._log.warning("Skipping %s check for %s: %s", check.name, path, exc)
                file_result.errors.append(str(exc))
            violations_found = violations_found or check_found

        file_result.violations_found = violations_found
        return file_result

    def _finish(self, result: RunResult) -> RunResult:
        self._transition(RunState.DONE)
        self._log.info("%s", result.summary_line())
        return result

    def _transition(self, state: RunState) -> None:
        self._log.debug("Runner state %s -> %s", self._state.value, state.value)
        self._state = state


def run_scan(
    root: Path,
    config: CheckConfig,
    log: Optional[logging.Logger] = None,
    jobs: int = 1,
) -> RunResult:
    return CheckRunner(root, config, log=log, jobs=jobs).run()
