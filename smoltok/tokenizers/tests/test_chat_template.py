"""Unit tests for chat_template.py."""

import unittest

from smoltok.tokenizers.chat_template import format_chat_prompt


class TestFormatChatPrompt(unittest.TestCase):
    """Unit tests for format_chat_prompt()."""

    def test_empty(self) -> None:
        self.assertEqual(format_chat_prompt([], add_generation_prompt=False), "")
        self.assertEqual(format_chat_prompt([]), "<|im_start|>assistant\n")

    def test_system_and_user(self) -> None:
        out = format_chat_prompt(
            [
                {"role": "system", "content": "You are a helpful assistant."},
                {"role": "user", "content": "Hello"},
            ]
        )
        self.assertEqual(
            out,
            "<|im_start|>system\nYou are a helpful assistant.<|im_end|>\n"
            "<|im_start|>user\nHello<|im_end|>\n"
            "<|im_start|>assistant\n",
        )

    def test_without_generation_prompt(self) -> None:
        out = format_chat_prompt([{"role": "user", "content": ""}], add_generation_prompt=False)
        self.assertEqual(out, "<|im_start|>user\n<|im_end|>\n")

    def test_invalid_message(self) -> None:
        with self.assertRaises(ValueError):
            format_chat_prompt([{"content": "Hello"}])
        with self.assertRaises(ValueError):
            format_chat_prompt([{"role": "user"}])
