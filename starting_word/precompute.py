"""
starting_word/precompute.py

Rank the opening guesses of a dictionary with the entropy maximizer and
store them in the guess cache, so that the solver CLI answers its first
turn instantly.

Templates ranked:
- wordle: one, '.' * size
- motus:  one per (first letter, length) found in the dictionary, or the
          ones given with --templates

Output columns (CSV):
- template, rank, guess
- entropy: expected information of the guess (bits, higher is better)
- is_solution: whether the guess may itself be the word

Usage:
  python -m starting_word.precompute --dictionary data/french_wordlist.txt --top 20 --csv openers.csv
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import Iterable, List, Optional

import pandas as pd

from alphadocte.cache import GuessCache
from alphadocte.config import DEFAULT_NUMBER_OF_GUESSES, WORDLE_DEFAULT_SIZE, load_settings, resolve_data_dir
from alphadocte.data_utils import dictionary_name, load_dictionary, resolve_dictionary_path
from alphadocte.dictionary import Dictionary
from alphadocte.entropy import EntropyMaximizer
from alphadocte.exceptions import AlphadocteError, CacheError
from alphadocte.rules import RULES_NAMES, create_rules

log = logging.getLogger(__name__)

COLUMNS = ["template", "rank", "guess", "entropy", "is_solution"]


def motus_templates(dictionary: Dictionary) -> List[str]:
    """Every '<first letter>....' template a Motus game on `dictionary` can start from, sorted."""
    return sorted({w[0] + "." * (len(w) - 1) for w in dictionary})


def rank_opening_guesses(
    solver: EntropyMaximizer,
    templates: Iterable[str],
    top: int,
    *,
    cache: Optional[GuessCache] = None,
    progress: bool = False,
) -> pd.DataFrame:
    """
    Compute the `top` best guesses of each template and, when given, store
    them in `cache`.

    Returns
    -------
    pandas.DataFrame
        One row per (template, guess) with the COLUMNS above, best first
        within each template.
    """
    templates = list(templates)
    rows = []
    for i, template in enumerate(templates):
        solver.set_template(template)
        guesses = solver.compute_next_guesses(top)
        if cache is not None:
            cache.set_top_guesses(solver.solver_name, solver.solver_version, solver.template, top, guesses)
        for rank, (guess, entropy) in enumerate(guesses, start=1):
            rows.append(
                {
                    "template": solver.template,
                    "rank": rank,
                    "guess": guess,
                    "entropy": float(entropy),
                    "is_solution": solver.is_potential_solution(guess),
                }
            )
        if progress:
            print(f"Ranked {i+1}/{len(templates)} templates ({template})", flush=True)
    return pd.DataFrame(rows, columns=COLUMNS)


def _print_top(results: pd.DataFrame, k: int = 10) -> None:
    for template, group in results.groupby("template", sort=False):
        print(f"\nTop {min(k, len(group))} opening guesses for {template}:")
        print(f"{'rank':>4}  {'guess':<10}  {'entropy':>8}  sol")
        for row in group.head(k).itertuples(index=False):
            print(f"{row.rank:>4}  {row.guess:<10}  {row.entropy:>8.3f}  {'*' if row.is_solution else ''}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Precompute the best opening guesses of a dictionary")
    ap.add_argument("--dictionary", required=True, help="Word list path, or dictionary name in the data directory")
    ap.add_argument("--rules", choices=RULES_NAMES, default="wordle")
    ap.add_argument("--size", type=int, default=WORDLE_DEFAULT_SIZE, help="Number of letters (wordle)")
    ap.add_argument("--top", type=int, default=DEFAULT_NUMBER_OF_GUESSES, help="Guesses kept per template")
    ap.add_argument("--templates", nargs="*", default=None, help="Motus templates to rank, e.g. c...... m.....")
    ap.add_argument("--csv", default=None, help="Also write the ranking to this CSV file")
    ap.add_argument("--no-cache", action="store_true", help="Do not write the guess cache")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        path = resolve_dictionary_path(args.dictionary, resolve_data_dir(os.environ))
        rules = create_rules(args.rules, load_dictionary(path), word_size=args.size)
    except (OSError, AlphadocteError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.rules == "wordle":
        templates = ["." * args.size]
    else:
        templates = args.templates or motus_templates(rules.dictionary)

    cache = None
    cache_path = None
    if not args.no_cache:
        try:
            cache_path = load_settings().cache_path(dictionary_name(path))
        except AlphadocteError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        try:
            cache = GuessCache.load(cache_path, path)
        except CacheError as e:
            log.info("starting a new guess cache: %s", e)
            cache = GuessCache(path)

    solver = EntropyMaximizer(rules)
    print(f"Ranking opening guesses of {len(templates)} template(s) over {len(rules.dictionary)} words...", flush=True)
    t0 = time.perf_counter()
    try:
        results = rank_opening_guesses(solver, templates, args.top, cache=cache, progress=len(templates) > 1)
    except AlphadocteError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)
    _print_top(results)

    if cache is not None:
        try:
            cache.write(cache_path)
            print(f"Cache written to {cache_path}")
        except OSError as e:
            log.warning("cannot write guess cache %s: %s", cache_path, e)
    if args.csv:
        results.to_csv(args.csv, index=False)
        print(f"Wrote results to {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
