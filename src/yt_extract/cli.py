"""Command-line interface for yt-extract."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from . import __version__
from .extractor import YouTubePageExtractor
from .models import ExtractionResult
from .urls import is_video_url


def _sanitize_filename(value: str) -> str:
    """Sanitize filename for cross-platform safety."""
    if not value:
        return "untitled"
    for ch in '/\\:*?"<>|':
        value = value.replace(ch, "_")
    return " ".join(value.split()).strip() or "untitled"


def _timestamped_lines(result: ExtractionResult) -> list[str]:
    return [f"[{seg.formatted_time}] {seg.text}" for seg in result.segments]


def _save_transcript(result: ExtractionResult, output_dir: str) -> str:
    """Write the timestamped transcript to ``<video_id>.txt`` and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    video_id = _sanitize_filename(result.video_id or "video")
    path = os.path.join(output_dir, f"{video_id}.txt")
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(_timestamped_lines(result)))
    return path


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Extract a YouTube video's timestamped transcript and top comments.",
    )
    parser.add_argument("url", nargs="?", default=None, help="YouTube video URL")
    parser.add_argument("--json", action="store_true", dest="output_json", help="output as JSON")
    parser.add_argument("--stdin", action="store_true", help="read URL from stdin")
    parser.add_argument("--max-pages", type=int, default=None,
                        help="comment pages to walk (default: 5)")
    parser.add_argument("--no-comments", action="store_true", help="skip comment pagination")
    parser.add_argument("--timeout", type=float, default=None,
                        help="watch page and transcript timeout in seconds (default: 15)")
    parser.add_argument("--page-timeout", type=float, default=None,
                        help="per comment page timeout in seconds (default: 8)")
    parser.add_argument("--output-dir", default=None, help="transcript output directory (enables saving)")
    parser.add_argument("--no-save", action="store_true", help="skip saving transcript to disk")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args()

    logging.basicConfig(
        format="%(levelname)s: %(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    url = args.url
    if args.stdin:
        url = sys.stdin.readline().strip()

    if not url:
        parser.error("No URL provided. Pass a URL or use --stdin.")

    if not is_video_url(url):
        print(f"Error: not a YouTube video URL: {url}", file=sys.stderr)
        sys.exit(1)

    try:
        extractor = YouTubePageExtractor(
            document_timeout=args.timeout,
            transcript_timeout=args.timeout,
            comment_page_timeout=args.page_timeout,
            max_comment_pages=0 if args.no_comments else args.max_pages,
        )
    except ValueError as e:
        parser.error(str(e))

    result = extractor.extract(url)

    output_file = None
    if result.segments and args.output_dir and not args.no_save:
        output_file = _save_transcript(result, os.path.expanduser(args.output_dir))

    if args.output_json:
        data = result.to_dict()
        if output_file:
            data["output_file"] = output_file
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    if not result.segments and not result.comments:
        print(f"Error: no transcript or comments found for {result.video_url}", file=sys.stderr)
        sys.exit(1)

    if result.thumbnail_url:
        print(f"Thumbnail: {result.thumbnail_url}")
        print("=" * 50)
    for line in _timestamped_lines(result):
        print(line)
    if result.comments:
        print("=" * 50)
        print(f"Comments ({len(result.comments)}):")
        for comment in result.comments:
            print(f"- {comment}")
    if output_file:
        print("=" * 50)
        print(f"Saved: {output_file}")
