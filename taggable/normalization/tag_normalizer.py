# ==============================================
# TagNormalizer
# ==============================================
#
# PURPOSE:
#   Turn any mix of raw candidates (phrases, numbers, lists of
#   phrases, already-normalized tags) into the canonical tag set.
#
# WHY THIS CLASS EXISTS:
#   Tags come from explicit user input, from record fields and from
#   referenced records. All of them must end up in one form:
#     - "JS Ninja", "js ninja", ["js", "NINJA"] → ["js", "ninja"]
#   Blacklist and stopword filtering are two separate subtraction
#   passes so each can be applied (and tested) on its own.
#
# CLASS: TagNormalizer
# --------------------
#   Constructor:
#   ------------
#   - __init__(stopwords: StopwordCorpus | None = None)
#
#   Methods:
#   --------
#   - normalize(*tags, remove_stopwords=True) -> list[str]
#       1. Drop falsy entries
#       2. Lowercase
#       3. Tokenize into word tokens
#       4. Flatten
#       5. Remove stopwords (optional)
#       6. Dedupe, first-seen order kept
#
#   - remove_blacklist(candidates, blacklist) -> list[str]
#       Normalize both sides (no stopword pass), return
#       candidates minus blacklist.
#
#   - remove_stopwords(*tags) -> list[str]
#       Tokenize and drop stopwords only.
#
# ==============================================

from typing import Any, Iterable, List, Optional

from .stopwords import StopwordCorpus
from .tokenizer import words


def _flatten(values: Iterable[Any]) -> List[Any]:
    flat: List[Any] = []
    for value in values:
        if isinstance(value, (list, tuple, set, frozenset)):
            flat.extend(_flatten(value))
        else:
            flat.append(value)
    return flat


def _unique(tokens: Iterable[str]) -> List[str]:
    seen = set()
    unique = []
    for token in tokens:
        if token not in seen:
            seen.add(token)
            unique.append(token)
    return unique


class TagNormalizer:
    """Canonicalize raw candidate strings into tags."""

    def __init__(self, stopwords: Optional[StopwordCorpus] = None):
        self.stopwords = stopwords or StopwordCorpus()

    def normalize(self, *tags: Any, remove_stopwords: bool = True) -> List[str]:
        """
        Normalize tags into lowercase, unique word tokens.

        Args:
            *tags: Raw candidates (strings, numbers or nested lists of them)
            remove_stopwords: Whether to drop stopwords from the result

        Returns:
            Canonical tags in first-seen order
        """
        # Remove falsy tags, bools are never tags
        candidates = [tag for tag in _flatten(tags) if tag and not isinstance(tag, bool)]

        # Lowercase then split into discrete words
        tokens: List[str] = []
        for candidate in candidates:
            tokens.extend(words(str(candidate).lower()))

        if remove_stopwords:
            tokens = self.stopwords.remove(tokens)

        return _unique(tokens)

    def remove_blacklist(self, candidates: Iterable[Any], blacklist: Iterable[Any]) -> List[str]:
        """
        Remove blacklisted words from candidates.

        Both sides are normalized without the stopword pass, so case and
        spacing variants of a blacklisted word are excluded too.
        """
        banned = set(self.normalize(*blacklist, remove_stopwords=False))
        allowed = self.normalize(*candidates, remove_stopwords=False)
        return [tag for tag in allowed if tag not in banned]

    def remove_stopwords(self, *tags: Any) -> List[str]:
        """Tokenize tags and drop stopwords, without lowercasing or deduping."""
        tokens = words([tag for tag in _flatten(tags) if tag and not isinstance(tag, bool)])
        return self.stopwords.remove(tokens)
