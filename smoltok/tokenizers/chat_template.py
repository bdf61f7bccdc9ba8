"""ChatML prompt formatting for instruction-tuned models."""

from typing import Mapping, Sequence


IM_START = "<|im_start|>"
IM_END = "<|im_end|>"

Message = Mapping[str, str]


def format_chat_prompt(messages: Sequence[Message], add_generation_prompt: bool = True) -> str:
    """Render chat turns with ChatML turn markers.

    Each message needs a `role` (e.g. "system", "user", "assistant") and a `content`. With
    `add_generation_prompt`, the prompt ends with an open assistant turn for the model to complete.
    """
    parts: list[str] = []
    for message in messages:
        role = message.get("role")
        content = message.get("content")
        if not role or content is None:
            raise ValueError(f"Chat message needs a `role` and a `content`: {message!r}")
        parts.append(f"{IM_START}{role}\n{content}{IM_END}\n")

    if add_generation_prompt:
        parts.append(f"{IM_START}assistant\n")

    return "".join(parts)
