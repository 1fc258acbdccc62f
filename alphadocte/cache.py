"""
cache.py

On-disk cache of the top guesses computed by a solver for a template.

Ranking every guess of a full dictionary for the first turn is by far the
most expensive call, and its result only depends on the dictionary file,
the solver (name and version) and the template. The cache is bound to one
dictionary file and becomes invalid as soon as that file is modified.

File layout (JSON)
------------------
{
  "file_path": "/abs/path/french_wordlist.txt",
  "file_timestamp": 1650000000000000000,
  "solvers": {
    "entropy_maximizer": {
      "solver_version": 1,
      "guesses": {
        ".....": {"requested_number": 10, "guesses": [["raies", 5.82], ...]}
      }
    }
  }
}
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from alphadocte.dictionary import PathLike
from alphadocte.exceptions import ArgumentError, CacheError

if TYPE_CHECKING:
    from alphadocte.solver import Solver

log = logging.getLogger(__name__)

ENTRY_FILE_PATH = "file_path"
ENTRY_FILE_TIMESTAMP = "file_timestamp"
ENTRY_SOLVERS = "solvers"
ENTRY_SOLVER_VERSION = "solver_version"
ENTRY_GUESSES = "guesses"
ENTRY_REQUESTED_NUMBER = "requested_number"


def _timestamp(path: Path) -> int:
    return path.stat().st_mtime_ns


def _check_solvers(solvers: Any, path: PathLike) -> None:
    """Raise CacheError unless `solvers` has the layout documented above."""
    if not isinstance(solvers, dict):
        raise CacheError(f"malformed '{ENTRY_SOLVERS}' entry in cache {path}")
    for name, section in solvers.items():
        if (
            not isinstance(section, dict)
            or not isinstance(section.get(ENTRY_SOLVER_VERSION), int)
            or not isinstance(section.get(ENTRY_GUESSES), dict)
        ):
            raise CacheError(f"malformed section for solver {name!r} in cache {path}")
        for template, entry in section[ENTRY_GUESSES].items():
            if (
                not isinstance(entry, dict)
                or not isinstance(entry.get(ENTRY_REQUESTED_NUMBER), int)
                or not isinstance(entry.get(ENTRY_GUESSES), list)
                or not all(
                    isinstance(pair, list)
                    and len(pair) == 2
                    and isinstance(pair[0], str)
                    and isinstance(pair[1], (int, float))
                    for pair in entry[ENTRY_GUESSES]
                )
            ):
                raise CacheError(f"malformed guesses for template {template!r} in cache {path}")


class GuessCache:
    def __init__(self, dictionary_path: PathLike) -> None:
        path = Path(dictionary_path)
        if not path.is_file():
            raise ArgumentError(f"dictionary path {path} does not refer to a file")
        self._dictionary_path = path.resolve()
        self._timestamp = _timestamp(self._dictionary_path)
        self._solvers: Dict[str, Dict[str, Any]] = {}

    # ---------- Loading / saving ----------

    @classmethod
    def load(cls, path: PathLike, dictionary_path: PathLike) -> "GuessCache":
        """
        Read the cache stored at `path` for the dictionary at `dictionary_path`.

        Raises
        ------
        CacheError
            If the file cannot be read or parsed, misses required entries,
            belongs to another dictionary, or is outdated.
        """
        cache = cls(dictionary_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CacheError(f"cannot read cache {path}: {e}") from e

        if not isinstance(data, dict):
            raise CacheError(f"malformed cache {path}")
        for key in (ENTRY_FILE_PATH, ENTRY_FILE_TIMESTAMP):
            if key not in data:
                raise CacheError(f"cache {path} has no '{key}' entry")
        if Path(data[ENTRY_FILE_PATH]) != cache._dictionary_path:
            raise CacheError(f"cache {path} belongs to another dictionary: {data[ENTRY_FILE_PATH]}")
        if data[ENTRY_FILE_TIMESTAMP] != cache._timestamp:
            raise CacheError(f"cache {path} is outdated, the dictionary has been modified")

        solvers = data.get(ENTRY_SOLVERS, {})
        _check_solvers(solvers, path)
        cache._solvers = solvers
        log.debug("loaded guess cache %s", path)
        return cache

    def to_dict(self) -> Dict[str, Any]:
        return {
            ENTRY_FILE_PATH: str(self._dictionary_path),
            ENTRY_FILE_TIMESTAMP: self._timestamp,
            ENTRY_SOLVERS: self._solvers,
        }

    def write(self, path: PathLike) -> None:
        """Write the whole cache to `path`, or leave any previous file untouched on failure."""
        dest = Path(path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=dest.parent, prefix=dest.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            os.replace(tmp, dest)
        except BaseException:
            os.unlink(tmp)
            raise
        log.info("guess cache written to %s", dest)

    # ---------- Accessors ----------

    @property
    def dictionary_path(self) -> Path:
        return self._dictionary_path

    @property
    def dictionary_timestamp(self) -> int:
        return self._timestamp

    def is_valid(self) -> bool:
        """True iff the dictionary file still exists and has not been modified since."""
        try:
            return _timestamp(self._dictionary_path) == self._timestamp
        except OSError:
            return False

    def get_top_guesses(
        self,
        solver_name: str,
        solver_version: int,
        n: int,
        template: str,
    ) -> List[Tuple[str, float]]:
        """
        Return the `n` best cached guesses for `template`.

        Raises
        ------
        CacheError
            If the cache is outdated, nothing is cached for this solver version
            and template, or fewer than `n` guesses were requested when caching.
        """
        if not self.is_valid():
            raise CacheError("cache is outdated, the dictionary has been modified")

        section = self._solvers.get(solver_name)
        if section is None or section.get(ENTRY_SOLVER_VERSION) != solver_version:
            raise CacheError(f"no cached guesses for solver {solver_name} v{solver_version}")

        entry = section.get(ENTRY_GUESSES, {}).get(template)
        if entry is None:
            raise CacheError(f"no cached guesses for template {template!r}")
        if entry.get(ENTRY_REQUESTED_NUMBER, 0) < n:
            raise CacheError(
                f"only {entry.get(ENTRY_REQUESTED_NUMBER, 0)} guesses cached for template {template!r}"
            )

        try:
            guesses = [(str(word), float(score)) for word, score in entry.get(ENTRY_GUESSES, [])]
        except (TypeError, ValueError) as e:
            raise CacheError(f"malformed cached guesses for template {template!r}") from e
        return guesses[:n]

    def set_top_guesses(
        self,
        solver_name: str,
        solver_version: int,
        template: str,
        n: int,
        guesses: Sequence[Tuple[str, float]],
    ) -> None:
        """
        Cache `guesses` (at most `n` pairs, fewer if not enough guesses exist)
        for `template`. A section left by another version of the solver is dropped.
        """
        if len(guesses) > n:
            raise ArgumentError("more guesses than requested")

        section = self._solvers.get(solver_name)
        if section is None or section.get(ENTRY_SOLVER_VERSION) != solver_version:
            section = {ENTRY_SOLVER_VERSION: solver_version, ENTRY_GUESSES: {}}
            self._solvers[solver_name] = section

        section[ENTRY_GUESSES][template] = {
            ENTRY_REQUESTED_NUMBER: n,
            ENTRY_GUESSES: [[word, float(score)] for word, score in guesses],
        }


def cached_top_guesses(
    solver: "Solver",
    n: int,
    dictionary_path: PathLike,
    cache_path: Optional[PathLike] = None,
) -> List[Tuple[str, float]]:
    """
    solver.compute_next_guesses(n) for the solver's current template, read from
    the cache at `cache_path` when possible. A miss is computed and written back.
    Without `cache_path` the cache is bypassed.
    """
    if cache_path is None:
        return solver.compute_next_guesses(n)

    try:
        cache = GuessCache.load(cache_path, dictionary_path)
    except CacheError as e:
        log.info("starting a new guess cache: %s", e)
        cache = GuessCache(dictionary_path)

    try:
        guesses = cache.get_top_guesses(solver.solver_name, solver.solver_version, n, solver.template)
        log.info("cache hit for template %r", solver.template)
        return guesses
    except CacheError as e:
        log.info("cache miss: %s", e)

    guesses = solver.compute_next_guesses(n)
    cache.set_top_guesses(solver.solver_name, solver.solver_version, solver.template, n, guesses)
    try:
        cache.write(cache_path)
    except OSError as e:
        log.warning("cannot write guess cache %s: %s", cache_path, e)
    return guesses
