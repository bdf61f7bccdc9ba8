"""Reversible mapping between raw bytes and printable unicode characters.

BPE merge rules for byte-level vocabularies are written over printable text, so every byte
(including whitespace and control bytes) is first given a stand-in character. Bytes that are
already printable map to themselves, and the rest are shifted to codepoints starting at 256.

Ref: https://github.com/openai/gpt-2/blob/master/src/encoder.py
"""

from __future__ import annotations


ByteEncoder = dict[int, str]
ByteDecoder = dict[str, int]


def _visible_bytes() -> list[int]:
    return (
        list(range(ord("!"), ord("~") + 1))
        + list(range(ord("¡"), ord("¬") + 1))
        + list(range(ord("®"), ord("ÿ") + 1))
    )


def build_byte_encoder() -> ByteEncoder:
    """Build the byte -> character bijection over all 256 byte values."""
    visible = set(_visible_bytes())
    byte_encoder: ByteEncoder = {}
    n = 0
    for b in range(256):
        if b in visible:
            byte_encoder[b] = chr(b)
        else:
            byte_encoder[b] = chr(256 + n)
            n += 1
    return byte_encoder


class ByteUnicodeMap:
    """Bijection between the 256 byte values and printable characters."""

    def __init__(self) -> None:
        """Initialize the map."""
        self.byte_encoder = build_byte_encoder()
        self.byte_decoder: ByteDecoder = {ch: b for b, ch in self.byte_encoder.items()}

    def __len__(self) -> int:
        return len(self.byte_encoder)

    def encode_bytes(self, data: bytes) -> str:
        """Map every byte to its printable stand-in."""
        return "".join(self.byte_encoder[b] for b in data)

    def encode_text(self, text: str) -> str:
        """Map the UTF-8 bytes of `text` to their printable stand-ins."""
        return self.encode_bytes(text.encode("utf-8", errors="surrogatepass"))

    def decode_text(self, text: str) -> bytes:
        """Map printable stand-ins back to bytes.

        Characters outside the map are skipped.
        """
        byte_decoder = self.byte_decoder
        return bytes(byte_decoder[ch] for ch in text if ch in byte_decoder)
