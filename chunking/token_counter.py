"""
Token Counter for the Chunking Pipeline

A model-free estimate: one token per four characters, rounded up, and
never less than one. It is a pure function of string length, so chunk
boundaries are reproducible without loading a tokenizer. The same rule
converts overlap tokens back into words in the chunker.

Usage:
    from chunking.token_counter import count_tokens, count_tokens_batch

    n = count_tokens("Photosynthesis converts light into chemical energy.")
    counts = count_tokens_batch(["First sentence.", "Second sentence."])
"""

import math

CHARS_PER_TOKEN = 4


def count_tokens(text: str) -> int:
    """
    Estimate the number of tokens in a text string.

    Args:
        text: Any string, including the empty string.

    Returns:
        ceil(len(text) / 4), floored at 1.
    """
    return max(1, math.ceil(len(text) / CHARS_PER_TOKEN))


def count_tokens_batch(texts: list[str]) -> list[int]:
    """
    Estimate tokens for a list of texts.

    Args:
        texts: List of text strings.

    Returns:
        List of token counts, one per input text.
    """
    return [count_tokens(t) for t in texts]
