"""Parsing and rendering of ranked BPE merge rules (`merges.txt`)."""

from smoltok.tokenizers.errors import MalformedConfigError


SymbolPair = tuple[str, str]
MergeList = list[SymbolPair]
MergeRanks = dict[SymbolPair, int]

MERGES_HEADER = "#version: 0.2"


def parse_merges(text: str) -> MergeList:
    """Parse merge rules in priority order, skipping blank lines and comments.

    A line starting with `#` is a comment unless it splits into exactly two symbols, since `#` is
    itself a valid symbol (`# #` merges into `##`). The `#version` header is always skipped.
    """
    merge_list: MergeList = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or line.startswith("#version"):
            continue
        parts = line.split(" ")
        is_rule = len(parts) == 2 and parts[0] and parts[1]
        if not is_rule:
            if line.startswith("#"):
                continue
            raise MalformedConfigError(f"Invalid merge rule on line {line_no}: {line!r}")
        merge_list.append((parts[0], parts[1]))
    return merge_list


def convert_merge_list_to_merge_ranks(merge_list: MergeList) -> MergeRanks:
    """Convert an ordered list of merge rules to a merge priority lookup.

    Ranks are dense and follow list order. A repeated pair keeps the rank of its first occurrence.
    """
    merge_ranks: MergeRanks = {}
    for pair in merge_list:
        if pair not in merge_ranks:
            merge_ranks[pair] = len(merge_ranks)
    return merge_ranks


def convert_merge_ranks_to_merge_list(merge_ranks: MergeRanks) -> MergeList:
    """Convert a merge priority lookup back into an ordered list of merge rules."""
    return sorted(merge_ranks, key=merge_ranks.__getitem__)


def render_merges(merge_ranks: MergeRanks) -> str:
    """Render merge rules in the `merges.txt` format."""
    lines = [MERGES_HEADER]
    lines.extend(f"{first} {second}" for first, second in convert_merge_ranks_to_merge_list(merge_ranks))
    return "\n".join(lines) + "\n"
