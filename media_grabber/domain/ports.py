from abc import ABC, abstractmethod
from pathlib import Path

from pymonad.either import Either
from pymonad.maybe import Maybe

from .errors import DownloaderError
from .models import DownloadRequest


class MediaDownloader(ABC):
    """
    Port defining the contract for the external media downloader.
    """

    @abstractmethod
    async def probe_playlist_name(self, url: str) -> Maybe[str]:
        """
        Looks up the display name of the playlist behind a URL.

        Returns:
            Maybe: Just(sanitized_name), or Nothing when no usable name was found.
        """
        pass

    @abstractmethod
    async def download(self, request: DownloadRequest, destination: Path) -> Either[DownloaderError, str]:
        """
        Downloads the requested media into the destination directory.

        Returns:
            Either: A Right(success_message) or a Left(DownloaderError).
        """
        pass
