"""Local filler text adapter backed by Faker's lorem provider."""

from __future__ import annotations

from typing import Optional

from faker import Faker


class FakerFiller:
    """Generates one sentence with a random word count in [min_words, max_words)."""

    def __init__(
        self,
        locale: str = "en_US",
        min_words: int = 8,
        max_words: int = 16,
        seed: Optional[int] = None,
    ) -> None:
        if min_words < 1 or max_words <= min_words:
            raise ValueError(f"Invalid filler word range: [{min_words}, {max_words})")
        self._faker = Faker(locale)
        if seed is not None:
            self._faker.seed_instance(seed)
        self._min_words = min_words
        self._max_words = max_words

    def word_count(self) -> int:
        return self._faker.random.randrange(self._min_words, self._max_words)

    def sentence(self) -> str:
        return self._faker.sentence(nb_words=self.word_count(), variable_nb_words=False)
