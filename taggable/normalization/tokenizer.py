import re
from typing import Any, List


WORD_PATTERN = re.compile(r"\w+")


def words(phrase: Any) -> List[str]:
    """
    Extract word tokens from a phrase.

    Lists, tuples and sets are tokenized element by element. Anything
    else is converted with str(). Falsy input yields no tokens.

    Example:
        words("Hello World")  # ["Hello", "World"]
        words("any-js")       # ["any", "js"]
    """
    if phrase is None or phrase == "" or isinstance(phrase, bool):
        return []

    if isinstance(phrase, (list, tuple, set, frozenset)):
        tokens: List[str] = []
        for item in phrase:
            tokens.extend(words(item))
        return tokens

    return WORD_PATTERN.findall(str(phrase))
