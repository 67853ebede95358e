#!/usr/bin/env python3
"""
AutoFeedback - Command-line runner
==================================
Run: python3 -m autofeedback grade essay.pdf drawing.png
"""
import sys
import json
import asyncio
import argparse
import logging

from autofeedback.config import config
from autofeedback.settings_store import get_api_key, set_api_key, clear_api_key
from autofeedback.services.feedback_service import UploadedFile, generate_feedback_batch


def _print_record(record):
    print(f"\n📄 {record.file_name}  [{record.id}]")
    print(f"   Score: {record.score}/100 ({record.grade_label})")
    print(f"   {record.feedback}")
    print("   Strengths:")
    for s in record.strengths:
        print(f"     + {s}")
    print("   Areas for improvement:")
    for a in record.areas_for_improvement:
        print(f"     - {a}")
    if record.summary:
        print("\n   Summary:")
        for line in record.summary.splitlines():
            print(f"     {line}")


def _overrides(args) -> dict:
    """Config values set by grade flags."""
    overrides = {}
    if args.free:
        overrides["use_free_model"] = True
    elif not get_api_key():
        print("No OpenAI API key set, using the free model.", file=sys.stderr)
        overrides["use_free_model"] = True
    if args.no_delay:
        overrides["feedback_delay"] = 0
    return overrides


def _grade(args) -> int:
    config.update(_overrides(args))

    files = []
    for path in args.files:
        try:
            files.append(UploadedFile.from_path(path))
        except OSError as e:
            print(f"❌ Cannot read {path}: {e}", file=sys.stderr)
            return 1

    def notify(message):
        print(f"⚠️  {message}", file=sys.stderr)

    records = asyncio.run(generate_feedback_batch(files, notify=notify))

    if args.json:
        print(json.dumps([r.to_dict() for r in records], indent=2))
    else:
        for record in records:
            _print_record(record)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="autofeedback", description="AutoFeedback assignment feedback")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command")

    grade_p = sub.add_parser("grade", help="Generate feedback for files")
    grade_p.add_argument("files", nargs="+", help="Files to grade")
    grade_p.add_argument("--free", action="store_true", help="Use the free summarization model")
    grade_p.add_argument("--json", action="store_true", help="Print records as JSON")
    grade_p.add_argument("--no-delay", action="store_true", help="Skip the simulated inference delay")

    key_p = sub.add_parser("set-key", help="Save your OpenAI API key")
    key_p.add_argument("api_key")

    sub.add_parser("clear-key", help="Forget the saved OpenAI API key")
    sub.add_parser("show-config", help="Print the current configuration")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "grade":
        return _grade(args)
    elif args.command == "set-key":
        try:
            set_api_key(args.api_key)
        except ValueError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1
        print("✅ API key saved")
        return 0
    elif args.command == "clear-key":
        clear_api_key()
        print("✅ API key cleared")
        return 0
    elif args.command == "show-config":
        data = config.to_dict()
        data["api_key_set"] = bool(get_api_key())
        print(json.dumps(data, indent=2))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
