"""YouTube Page Extractor: transcripts and comments from a video's watch page."""

__version__ = "0.1.0"

from yt_extract.extractor import YouTubePageExtractor, extract
from yt_extract.models import ExtractionResult, TranscriptSegment, VideoReference

__all__ = [
    "YouTubePageExtractor",
    "extract",
    "ExtractionResult",
    "TranscriptSegment",
    "VideoReference",
    "__version__",
]
