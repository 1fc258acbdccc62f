from __future__ import annotations

from pathlib import Path

from alphadocte.dictionary import Dictionary, FixedSizeDictionary, PathLike

DICTIONARY_SUFFIX = "_wordlist.txt"


def load_dictionary(path: PathLike, word_size: int | None = None) -> Dictionary:
    """
    Load a word list, `.csv` files through pandas and anything else as plain text.
    Keeps only the words of `word_size` letters when it is given.
    """
    src = Path(path)
    if src.suffix == ".csv":
        dictionary = Dictionary.from_csv(src)
    else:
        dictionary = Dictionary.from_txt(src)

    if word_size is not None:
        return FixedSizeDictionary(dictionary, word_size)
    return dictionary


def dictionary_name(path: PathLike) -> str:
    """'data/french_wordlist.txt' -> 'french'."""
    name = Path(path).name
    if name.endswith(DICTIONARY_SUFFIX):
        return name[: -len(DICTIONARY_SUFFIX)]
    return Path(path).stem


def available_dictionaries(data_dir: PathLike) -> dict[str, Path]:
    """Map each `<name>_wordlist.txt` file of `data_dir` to its name, sorted by name."""
    root = Path(data_dir)
    if not root.is_dir():
        return {}
    found = {
        dictionary_name(p): p
        for p in root.iterdir()
        if p.is_file() and p.name.endswith(DICTIONARY_SUFFIX)
    }
    return dict(sorted(found.items()))


def resolve_dictionary_path(name_or_path: PathLike, data_dir: PathLike) -> Path:
    """
    Accept either a path to a word list or the name of a dictionary of `data_dir`
    ('french' -> data_dir/french_wordlist.txt).

    Raises
    ------
    FileNotFoundError
        If neither exists.
    """
    path = Path(name_or_path)
    if path.is_file():
        return path
    known = available_dictionaries(data_dir)
    if str(name_or_path) in known:
        return known[str(name_or_path)]
    names = ", ".join(known) or "none"
    raise FileNotFoundError(f"no dictionary {name_or_path!s} (available in {data_dir}: {names})")
