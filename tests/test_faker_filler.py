from __future__ import annotations

import pytest

from adapters.faker_filler import FakerFiller


def test_sentence_word_count_in_range() -> None:
    filler = FakerFiller(locale="en_US", min_words=8, max_words=16, seed=1234)
    for _ in range(50):
        words = filler.sentence().split()
        assert 8 <= len(words) < 16


def test_sentence_is_single_sentence() -> None:
    sentence = FakerFiller(seed=7).sentence()
    assert sentence.endswith(".")
    assert sentence.count(".") == 1
    assert sentence[0].isupper()


def test_invalid_range_is_rejected() -> None:
    with pytest.raises(ValueError):
        FakerFiller(min_words=8, max_words=8)
