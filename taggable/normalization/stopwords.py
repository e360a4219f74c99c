# ==============================================
# StopwordCorpus
# ==============================================
#
# PURPOSE:
#   Wrap the ISO stopword lists (stopwordsiso) as a single
#   lowercase lookup set covering every configured language.
#
# CLASS: StopwordCorpus
# ---------------------
#   Immutable once built. The underlying word set is loaded lazily
#   and cached per language selection, so every model sharing the
#   same languages shares one set.
#
#   Methods:
#   --------
#   - contains(word: str) -> bool        (also `word in corpus`)
#   - remove(tokens: list[str]) -> list[str]
#       Drop tokens that are stopwords, keep order.
#
# ==============================================

from functools import lru_cache
from typing import FrozenSet, Iterable, List, Optional, Tuple

import stopwordsiso


@lru_cache(maxsize=None)
def _load(languages: Tuple[str, ...]) -> FrozenSet[str]:
    available = set(stopwordsiso.langs())
    selected = [lang for lang in languages if lang in available] if languages else sorted(available)
    words = set()
    for lang in selected:
        words.update(word.lower() for word in stopwordsiso.stopwords(lang))
    return frozenset(words)


class StopwordCorpus:
    """
    Case-insensitive stopword lookup over one or more languages.

    An empty language selection means all languages known to stopwordsiso.
    Unknown language codes are ignored.
    """

    def __init__(self, languages: Optional[Iterable[str]] = None):
        self.languages: Tuple[str, ...] = tuple(sorted({lang.lower() for lang in languages or ()}))

    @property
    def words(self) -> FrozenSet[str]:
        return _load(self.languages)

    def contains(self, word: str) -> bool:
        return bool(word) and word.lower() in self.words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self.words)

    def remove(self, tokens: Iterable[str]) -> List[str]:
        stopwords = self.words
        return [token for token in tokens if token.lower() not in stopwords]
