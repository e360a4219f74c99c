# ==============================================
# TOPIC 1: NORMALIZATION
# ==============================================
#
# This package turns raw candidate text into canonical tags.
#
# Modules:
# --------
# - tokenizer.py      → Split phrases into word tokens
# - stopwords.py      → Multi-language stopword corpus
# - tag_normalizer.py → Lowercase, tokenize, filter and dedupe tags
#
# ==============================================

from .tokenizer import words
from .stopwords import StopwordCorpus
from .tag_normalizer import TagNormalizer

__all__ = ["words", "StopwordCorpus", "TagNormalizer"]
