"""Helpers for loading and writing tokenizer data files."""

import json
from os import PathLike
from typing import Any


def write_text_file(file_path: PathLike, text: str) -> None:
    """Write a UTF-8 encoded text file from a string in memory."""
    with open(file_path, mode="w", encoding="utf-8") as f:
        f.write(text)


def load_text_file(file_path: PathLike) -> str:
    """Load a UTF-8 encoded text file into a string in memory."""
    with open(file_path, mode="r", encoding="utf-8") as f:
        text = f.read()
    return text


def write_json_file(file_path: PathLike, data: Any) -> None:
    """Write a UTF-8 encoded JSON file, keeping non-ASCII characters readable."""
    with open(file_path, mode="w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.write("\n")


def load_json_file(file_path: PathLike) -> Any:
    """Load a UTF-8 encoded JSON file."""
    with open(file_path, mode="r", encoding="utf-8") as f:
        data = json.load(f)
    return data
