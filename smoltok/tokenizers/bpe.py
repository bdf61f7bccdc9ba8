"""Utilities for implementing the Byte-Pair Encoding (BPE) algorithm over byte-mapped text."""

import threading
import unicodedata

from smoltok.tokenizers.cython import bpe as _bpe_internal
from smoltok.tokenizers.merges import MergeRanks


Symbols = list[str]
WordCache = dict[str, Symbols]


def encode_word(word: str, merge_ranks: MergeRanks) -> Symbols:
    """Encode a byte-mapped word according to a merge priority.

    Each pass merges every non-overlapping occurence of the single lowest-ranked pair present, so
    the loop ends after at most `len(word) - 1` passes.
    """
    return _bpe_internal.encode_word(word, merge_ranks)


def merge_symbols(symbols: Symbols, first: str, second: str) -> Symbols:
    """Replace all occurences of `(first, second)` with their concatenation."""
    return _bpe_internal.merge_symbols(symbols, first, second)


class BpeEngine:
    """Applies merge rules to byte-mapped words, memoizing the result per distinct word.

    The merge ranks never change after construction, so cache entries never go stale. The cache is
    guarded by a lock so that one engine can be shared between threads.
    """

    def __init__(self, merge_ranks: MergeRanks) -> None:
        """Initialize the engine."""
        self.merge_ranks = merge_ranks
        self.cache: WordCache = {}
        self._lock = threading.Lock()

    def __call__(self, word: str, use_cache: bool = True) -> Symbols:
        """Encode a byte-mapped word into symbols."""
        if not use_cache:
            return encode_word(word, self.merge_ranks)

        with self._lock:
            maybe_symbols = self.cache.get(word, None)
        if maybe_symbols is not None:
            return list(maybe_symbols)

        symbols = encode_word(word, self.merge_ranks)
        with self._lock:
            self.cache[word] = symbols
        return list(symbols)

    @property
    def cache_size(self) -> int:
        """Number of distinct words memoized so far."""
        return len(self.cache)


def _replace_control_characters(s: str) -> str:
    """Escape control characters in a string.

    Ref: https://github.com/karpathy/minbpe/blob/1acefe89412b20245db5a22d2a02001e547dc602/minbpe/base.py#L44
    """
    chars: list[str] = []

    for ch in s:
        if unicodedata.category(ch)[0] == "C":
            chars.append(f"\\u{ord(ch):04x}")  # escape
        else:
            chars.append(ch)  # this character is ok

    return "".join(chars)


def render_bytes(b: bytes) -> str:
    """Convert a sequence of bytes to a string, escaping control characters."""
    s = b.decode("utf-8", errors="replace")
    s = _replace_control_characters(s)
    return s
