"""CLI interface for profanity-masker.

Usage:
    # Check text (stdin or --text), stdout: JSON result
    echo 'what the f-u-c-k' | python -m profanity_masker.cli check
    python -m profanity_masker.cli --language all check --text 'merde alors'

    # List bundled languages
    python -m profanity_masker.cli languages

    # Dump the merged raw configuration of a language
    python -m profanity_masker.cli --language german show-config
"""

from __future__ import annotations
import argparse
import json
import os
import sys

from .config import ENV_LANGUAGE, ENV_MASK
from .detector import DEFAULT_DENSITY_THRESHOLD, Detector, DetectorConfig
from .errors import ProfanityMaskerError
from .language_data import available_languages, load_language
from .logging_config import setup_logging
from .normalizers import ALL_LANGUAGES
from .types import DetectionMode


def _language(args: argparse.Namespace) -> str:
    return ALL_LANGUAGES if args.all_languages else args.language.lower()


def _build_detector(args: argparse.Namespace) -> Detector:
    mode = DetectionMode.NORMAL
    if args.strict:
        mode = DetectionMode.STRICT
    elif args.lenient:
        mode = DetectionMode.LENIENT
    return Detector(DetectorConfig(
        language=_language(args),
        mask=args.mask[:1],
        mode=mode,
        density_threshold=args.threshold,
        unique_by_match=args.unique_by_match,
    ))


def cmd_check(args: argparse.Namespace) -> None:
    """Check text from --text or stdin."""
    detector = _build_detector(args)
    text = args.text if args.text is not None else sys.stdin.read().rstrip("\n")

    result = detector.check(text)

    output = {
        "text": result.masked_text,
        "has_profanity": result.has_profanity,
        "count": result.match_count,
        "unique": list(result.unique_terms_found),
        "language": result.language,
    }
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_languages(args: argparse.Namespace) -> None:
    """List bundled languages."""
    json.dump(available_languages(), sys.stdout)
    sys.stdout.write("\n")


def cmd_show_config(args: argparse.Namespace) -> None:
    """Dump the merged raw configuration for --language."""
    data = load_language(_language(args))
    json.dump(data.as_dict(), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="profanity_masker",
        description="Detect and mask obfuscated profanity",
    )
    parser.add_argument("--language", default=os.environ.get(ENV_LANGUAGE, "english"),
                        help="Language name, or 'all'")
    parser.add_argument("--all-languages", action="store_true", help="Same as --language all")
    parser.add_argument("--mask", default=os.environ.get(ENV_MASK, "*"), help="Mask character")
    parser.add_argument("--threshold", type=float, default=DEFAULT_DENSITY_THRESHOLD,
                        help="Minimum match/word length ratio")
    parser.add_argument("--log-level", default="WARNING", help="Log level")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--strict", action="store_true", help="Accept matches inside longer words")
    mode.add_argument("--lenient", action="store_true", help="Only accept whole-word matches")
    parser.add_argument("--unique-by-match", action="store_true",
                        help="Report matched text instead of lexicon terms")

    sub = parser.add_subparsers(dest="command", required=True)
    check = sub.add_parser("check", help="Check text (stdin or --text)")
    check.add_argument("--text", default=None, help="Text to check instead of stdin")
    sub.add_parser("languages", help="List bundled languages")
    sub.add_parser("show-config", help="Dump merged language configuration")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    cmds = {
        "check": cmd_check,
        "languages": cmd_languages,
        "show-config": cmd_show_config,
    }
    try:
        cmds[args.command](args)
    except ProfanityMaskerError as e:
        parser.exit(2, f"error: {e}\n")


if __name__ == "__main__":
    main()
