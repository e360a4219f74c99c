# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Try the tag normalization pipeline from a shell, using the
#   same configuration (.env / TAGGABLE_* variables) as the plugin.
#
# COMMANDS:
# ---------
# 1. Normalize phrases into tags (blacklist + stopwords applied):
#    python -m taggable.cli tag "JS and Node" nodejs --blacklist js
#    python -m taggable.cli tag "JS and Node" --keep-stopwords
#
# 2. Show raw word tokens:
#    python -m taggable.cli words "any-js talks"
#
# ==============================================

import argparse
import sys
from typing import List, Optional

from .config import get_config
from .normalization import StopwordCorpus, TagNormalizer, words


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taggable",
        description="Derive normalized keyword tags from phrases"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tag_parser = subparsers.add_parser("tag", help="Normalize phrases into tags")
    tag_parser.add_argument("phrases", nargs="+", help="Phrases or tags")
    tag_parser.add_argument(
        "--blacklist", action="append", default=[],
        help="Word to exclude (repeatable); added to TAGGABLE_BLACKLIST"
    )
    tag_parser.add_argument(
        "--keep-stopwords", action="store_true",
        help="Do not remove stopwords"
    )

    words_parser = subparsers.add_parser("words", help="Split phrases into word tokens")
    words_parser.add_argument("phrases", nargs="+", help="Phrases to split")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "words":
        for token in words(args.phrases):
            print(token)
        return 0

    config = get_config()
    normalizer = TagNormalizer(StopwordCorpus(config.stopword_languages))
    blacklist = [*config.blacklist, *args.blacklist]

    allowed = normalizer.remove_blacklist(args.phrases, blacklist)
    tags = normalizer.normalize(*allowed, remove_stopwords=not args.keep_stopwords)
    for tag in tags:
        print(tag)
    return 0


if __name__ == "__main__":
    sys.exit(main())
