from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaFormat(str, Enum):
    MP4 = "mp4"
    WAV = "wav"


class DownloadMode(Enum):
    """The four download types offered by the menu."""

    SINGLE_VIDEO = ("1", "Video MP4", False, MediaFormat.MP4)
    VIDEO_PLAYLIST = ("2", "Video Playlist MP4", True, MediaFormat.MP4)
    SINGLE_AUDIO = ("3", "Audio WAV", False, MediaFormat.WAV)
    AUDIO_PLAYLIST = ("4", "Audio Playlist WAV", True, MediaFormat.WAV)

    def __init__(self, key: str, label: str, is_playlist: bool, media_format: MediaFormat):
        self.key = key
        self.label = label
        self.is_playlist = is_playlist
        self.media_format = media_format

    @classmethod
    def from_selection(cls, selection: str) -> Optional["DownloadMode"]:
        selection = selection.strip()
        for mode in cls:
            if mode.key == selection:
                return mode
        return None


@dataclass(frozen=True)
class DownloadRequest:
    """What the user asked for: a mode and a source URL."""
    mode: DownloadMode
    url: str

    @property
    def is_playlist(self) -> bool:
        return self.mode.is_playlist

    @property
    def format(self) -> MediaFormat:
        return self.mode.media_format

    @property
    def media_type(self) -> str:
        if self.is_playlist:
            return "playlist"
        return "audio" if self.format is MediaFormat.WAV else "video"
