"""Unit tests for special_tokens.py."""

import unittest

from smoltok.tokenizers.special_tokens import SpecialTokenSplitter


class TestEmptySpecialTokens(unittest.TestCase):
    """Unit tests for SpecialTokenSplitter without any special tokens."""

    def setUp(self) -> None:
        self.splitter = SpecialTokenSplitter([])

    def test_matches_nothing(self) -> None:
        self.assertListEqual(self.splitter.split("<|im_start|>hi"), ["<|im_start|>hi"])

    def test_empty(self) -> None:
        self.assertListEqual(self.splitter.split(""), [])


class TestSpecialTokenSplitter(unittest.TestCase):
    """Unit tests for SpecialTokenSplitter."""

    def setUp(self) -> None:
        self.splitter = SpecialTokenSplitter(["<|im_start|>", "<|im_end|>", "<|endoftext|>"])

    def test_contains(self) -> None:
        self.assertIn("<|im_end|>", self.splitter)
        self.assertNotIn("<|im_end", self.splitter)

    def test_no_special_tokens_in_text(self) -> None:
        self.assertListEqual(self.splitter.split("hello world"), ["hello world"])

    def test_split(self) -> None:
        out = self.splitter.split("<|im_start|>user\nhi<|im_end|>\n")
        self.assertListEqual(out, ["<|im_start|>", "user\nhi", "<|im_end|>", "\n"])

    def test_adjacent(self) -> None:
        out = self.splitter.split("<|im_end|><|im_end|>")
        self.assertListEqual(out, ["<|im_end|>", "<|im_end|>"])

    def test_partial_token_is_text(self) -> None:
        self.assertListEqual(self.splitter.split("<|im_end"), ["<|im_end"])

    def test_regex_metacharacters_are_literal(self) -> None:
        splitter = SpecialTokenSplitter(["[.*]"])
        self.assertListEqual(splitter.split("a[.*]b.x"), ["a", "[.*]", "b.x"])

    def test_longer_token_wins(self) -> None:
        splitter = SpecialTokenSplitter(["<s>", "<s>>"])
        self.assertListEqual(splitter.split("a<s>>b<s>"), ["a", "<s>>", "b", "<s>"])
