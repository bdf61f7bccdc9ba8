"""Small hand-built vocabulary shared by the tokenizer tests.

Ids 0-2 are special tokens, ids 3-258 are the 256 single-byte tokens (byte `b` has id `b + 3`),
and ids from 259 are the results of the merge rules, in rank order.
"""

from typing import Any

from smoltok.tokenizers.byte_map import build_byte_encoder
from smoltok.tokenizers.merges import MergeList


ENDOFTEXT = "<|endoftext|>"
IM_START = "<|im_start|>"
IM_END = "<|im_end|>"

MERGE_LIST: MergeList = [
    ("H", "e"),
    ("He", "l"),
    ("Hel", "l"),
    ("Hell", "o"),
    ("Ġ", "w"),
    ("Ġw", "o"),
    ("Ġwo", "r"),
    ("Ġwor", "l"),
    ("Ġworl", "d"),
]

HELLO = 262
SPACE_WORLD = 267


def byte_token(b: int) -> int:
    """Id of the single-byte token for byte `b`."""
    return b + 3


def make_vocab() -> dict[str, int]:
    vocab = {ch: byte_token(b) for b, ch in build_byte_encoder().items()}
    for i, (first, second) in enumerate(MERGE_LIST):
        vocab[first + second] = 259 + i
    return vocab


def make_merges_text() -> str:
    lines = ["#version: 0.2"]
    lines.extend(f"{first} {second}" for first, second in MERGE_LIST)
    return "\n".join(lines) + "\n"


def make_config() -> dict[str, Any]:
    return {
        "added_tokens_decoder": {
            "0": {"content": ENDOFTEXT, "special": True},
            "1": {"content": IM_START, "special": True},
            "2": {"content": IM_END, "special": True},
            "1000": {"content": "<think>", "special": False},
        },
        "eos_token": IM_END,
        "pad_token": IM_END,
        "unk_token": ENDOFTEXT,
    }
