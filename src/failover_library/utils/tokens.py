# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""Rough token estimate for prompts, without a tokenizer."""

import re

_CJK_PATTERN = re.compile(r"[\u4e00-\u9fff]")
_WORD_PATTERN = re.compile(r"\b\w+\b", re.ASCII)


def estimate_token_count(text: str) -> int:
    """
    Estimate the token count of a text.

    Each CJK ideograph counts as one token; ASCII words count 1.2 tokens
    each, rounded down over the whole text.
    """
    cjk_count = len(_CJK_PATTERN.findall(text))
    word_count = len(_WORD_PATTERN.findall(text))
    return cjk_count + int(word_count * 1.2)
