#!/usr/bin/env python3
"""Unit tests for yt_extract.urls"""

import unittest

from yt_extract.models import VideoReference
from yt_extract.urls import (
    extract_video_id,
    is_video_url,
    normalize_url,
    resolve_video,
    thumbnail_url,
    timestamp_url,
)


class TestNormalizeUrl(unittest.TestCase):
    def test_short_url(self):
        self.assertEqual(
            normalize_url("https://youtu.be/dQw4w9WgXcQ"),
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        )

    def test_short_url_strips_query(self):
        self.assertEqual(
            normalize_url("https://youtu.be/dQw4w9WgXcQ?t=30&si=abc"),
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        )

    def test_long_url_unchanged(self):
        url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=120"
        self.assertEqual(normalize_url(url), url)

    def test_short_and_long_forms_agree(self):
        short = resolve_video("https://youtu.be/dQw4w9WgXcQ?t=30")
        long = resolve_video("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        self.assertEqual(short, long)


class TestExtractVideoId(unittest.TestCase):
    def test_known_shapes_agree(self):
        urls = [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtube.com/watch?v=dQw4w9WgXcQ",
            "https://m.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/v/dQw4w9WgXcQ",
            "https://www.youtube.com/shorts/dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
        ]
        for url in urls:
            with self.subTest(url=url):
                self.assertEqual(extract_video_id(url), "dQw4w9WgXcQ")

    def test_watch_url_with_extra_params(self):
        self.assertEqual(
            extract_video_id("https://www.youtube.com/watch?v=abc123XYZ_-&t=120"),
            "abc123XYZ_-",
        )

    def test_invalid_url(self):
        self.assertIsNone(extract_video_id("https://example.com/page"))

    def test_no_video_id_in_query(self):
        self.assertIsNone(extract_video_id("https://www.youtube.com/watch?list=PLxyz"))

    def test_empty_string(self):
        self.assertIsNone(extract_video_id(""))

    def test_random_string(self):
        self.assertIsNone(extract_video_id("not a url at all"))

    def test_resolve_non_video(self):
        self.assertEqual(
            resolve_video("https://example.com/page"),
            VideoReference(video_id=None, normalized_url="https://example.com/page"),
        )


class TestIsVideoUrl(unittest.TestCase):
    def test_video_urls(self):
        self.assertTrue(is_video_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ"))
        self.assertTrue(is_video_url("https://youtu.be/dQw4w9WgXcQ"))

    def test_other_urls(self):
        self.assertFalse(is_video_url("https://www.youtube.com/"))
        self.assertFalse(is_video_url("https://example.com/watch"))


class TestThumbnailUrl(unittest.TestCase):
    def test_none(self):
        self.assertIsNone(thumbnail_url(None))

    def test_contains_id(self):
        url = thumbnail_url("abc12345678")
        self.assertIn("abc12345678", url)
        self.assertTrue(url.endswith("/maxresdefault.jpg"))


class TestTimestampUrl(unittest.TestCase):
    def test_floors_seconds(self):
        self.assertEqual(
            timestamp_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ", 75.9),
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=75s",
        )

    def test_short_url_and_existing_t(self):
        self.assertEqual(
            timestamp_url("https://youtu.be/dQw4w9WgXcQ", 4),
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=4s",
        )
        self.assertEqual(
            timestamp_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10s", 20),
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=20s",
        )
