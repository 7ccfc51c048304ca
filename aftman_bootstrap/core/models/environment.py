"""
Execution environment — the variables handed to every child process.

The bootstrapper never touches ``os.environ``. A fresh manager install
produces a *new* environment with the manager's bin directory on PATH,
and every later subcommand runs with that value. The host process and
the user's persistent environment are left alone.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field


class ExecutionEnvironment(BaseModel):
    """Immutable set of environment variables for subprocesses."""

    model_config = ConfigDict(frozen=True)

    variables: dict[str, str] = Field(default_factory=dict)
    separator: str = os.pathsep

    @classmethod
    def from_os(cls) -> ExecutionEnvironment:
        """Snapshot the current process environment."""
        return cls(variables=dict(os.environ))

    @classmethod
    def from_mapping(
        cls, variables: Mapping[str, str], separator: str = os.pathsep
    ) -> ExecutionEnvironment:
        return cls(variables=dict(variables), separator=separator)

    def _path_key(self) -> str:
        # Windows spells it "Path"; keep whichever spelling is present.
        for key in self.variables:
            if key.upper() == "PATH":
                return key
        return "PATH"

    @property
    def path(self) -> str:
        return self.variables.get(self._path_key(), "")

    @property
    def path_entries(self) -> list[str]:
        return [entry for entry in self.path.split(self.separator) if entry]

    def with_path_entry(self, directory: str | os.PathLike[str]) -> ExecutionEnvironment:
        """Return a copy with ``directory`` appended to PATH."""
        entries = self.path_entries
        entries.append(os.fspath(directory))
        variables = dict(self.variables)
        variables[self._path_key()] = self.separator.join(entries)
        return self.model_copy(update={"variables": variables})

    def as_dict(self) -> dict[str, str]:
        """Plain dict suitable for ``subprocess.run(env=...)``."""
        return dict(self.variables)
