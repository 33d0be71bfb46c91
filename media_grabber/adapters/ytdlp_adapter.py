import asyncio
import codecs
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pymonad.either import Either, Left, Right
from pymonad.maybe import Just, Maybe, Nothing
from rich.console import Console
from rich.markup import escape

from media_grabber.auth import has_cookies
from media_grabber.domain.errors import DownloaderError
from media_grabber.domain.models import DownloadRequest, MediaFormat
from media_grabber.domain.ports import MediaDownloader
from media_grabber.i18n import get_message
from media_grabber.storage import sanitize_playlist_name

logger = logging.getLogger(__name__)

PROBE_FALLBACK_NAME = "playlist"
UNAVAILABLE_VALUES = ("NA", "None")
MP4_FORMAT_SELECTOR = "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best"
CHUNK_SIZE = 4096


def _is_usable_title(title: str) -> bool:
    return bool(title) and title not in UNAVAILABLE_VALUES


class YTDLPAdapter(MediaDownloader):
    """Drives the yt-dlp executable as a subprocess."""

    def __init__(
        self,
        command: Sequence[str] = ("yt-dlp",),
        cookie_file: Path = Path("cookies.txt"),
        probe_timeout: float = 8.0,
        socket_timeout: int = 5,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        self._command = tuple(command)
        self._cookie_file = Path(cookie_file)
        self._probe_timeout = probe_timeout
        self._socket_timeout = socket_timeout
        self._console = console or Console()
        self._error_console = error_console or Console(stderr=True)

    def _cookie_args(self) -> List[str]:
        if has_cookies(self._cookie_file):
            return ["--cookies", str(self._cookie_file)]
        return []

    def probe_args(self, url: str) -> List[str]:
        """Arguments for a metadata-only run that prints the first item's playlist title."""
        return [
            *self._command,
            "--print", "%(playlist_title)s",
            "--no-download",
            "--playlist-items", "1",
            "--socket-timeout", str(self._socket_timeout),
            "--no-check-certificates",
            *self._cookie_args(),
            url,
        ]

    def download_args(
        self,
        url: str,
        destination: Path,
        is_playlist: bool = False,
        media_format: Union[MediaFormat, str] = MediaFormat.MP4,
    ) -> List[str]:
        args = [
            *self._command,
            "-o", str(Path(destination) / "%(title)s.%(ext)s"),
            "--no-check-certificates",
            "--yes-playlist" if is_playlist else "--no-playlist",
        ]
        args += self._cookie_args()

        if MediaFormat(media_format) is MediaFormat.WAV:
            args += ["--extract-audio", "--audio-format", "wav"]
        else:
            args += ["-f", MP4_FORMAT_SELECTOR]

        args.append(url)
        return args

    @staticmethod
    async def _stop(process: asyncio.subprocess.Process) -> None:
        """Kills the process if it is still running, then reaps it."""
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()

    async def _read_playlist_title(self, process: asyncio.subprocess.Process) -> Optional[str]:
        # Only the first non-blank chunk counts; everything after it is drained and ignored.
        captured = ""
        while True:
            chunk = await process.stdout.read(CHUNK_SIZE)
            if not chunk:
                break
            if captured:
                continue
            captured = chunk.decode("utf-8", errors="replace").strip()
            if _is_usable_title(captured):
                return captured

        return_code = await process.wait()
        logger.info(f"Playlist probe exited with code {return_code} without a usable title ({captured!r}).")
        return None

    async def probe_playlist_name(self, url: str) -> Maybe[str]:
        """
        Asks yt-dlp for the playlist title of the first item behind `url`.

        Best effort: a timeout, a missing executable, a non-zero exit or an
        "NA"/"None" answer all give Nothing. Never raises for probe failures.
        """
        args = self.probe_args(url)
        logger.info(f"Probing playlist name for '{url}'.")

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except (OSError, ValueError) as e:
            logger.warning(f"Could not start the playlist probe: {e}")
            return Nothing

        try:
            title = await asyncio.wait_for(self._read_playlist_title(process), timeout=self._probe_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Playlist probe timed out after {self._probe_timeout}s.")
            title = None
        except OSError as e:
            logger.warning(f"Playlist probe failed: {e}")
            title = None
        finally:
            await self._stop(process)

        if title is None:
            return Nothing

        name = sanitize_playlist_name(title)
        logger.info(f"Playlist title {title!r} resolved to '{name}'.")
        return Just(name) if name else Nothing

    async def extract_playlist_name(self, url: str) -> str:
        """String form of the probe: the sanitized name, or "playlist" when none was found."""
        result = await self.probe_playlist_name(url)
        return result.maybe(PROBE_FALLBACK_NAME, lambda name: name)

    @staticmethod
    async def _forward(stream: asyncio.StreamReader, console: Console, collected: Optional[List[str]] = None) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            chunk = await stream.read(CHUNK_SIZE)
            text = decoder.decode(chunk, final=not chunk)
            if text:
                # Raw passthrough keeps yt-dlp's own progress formatting intact.
                console.file.write(text)
                console.file.flush()
                if collected is not None:
                    collected.append(text)
            if not chunk:
                break

    async def download(self, request: DownloadRequest, destination: Path) -> Either[DownloaderError, str]:
        """
        Runs yt-dlp for the request, streaming its output live to the console.

        Returns:
            Either[DownloaderError, str]: Right with a success message, or Left
            carrying the exit code and everything yt-dlp wrote to stderr.
        """
        args = self.download_args(request.url, destination, request.is_playlist, request.format)

        if "--cookies" in args:
            self._console.print(get_message("using_cookies"))
        self._console.print(get_message("downloading", media_type=request.media_type))
        self._console.print(get_message("saving_to", path=escape(str(destination))))
        self._console.print(get_message("format", format=request.format.value.upper()))

        logger.info(f"Starting yt-dlp: {args}")
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            logger.error(f"Could not start yt-dlp: {e}")
            return Left(DownloaderError(str(e)))

        stderr_parts: List[str] = []
        try:
            await asyncio.gather(
                self._forward(process.stdout, self._console),
                self._forward(process.stderr, self._error_console, stderr_parts),
            )
            return_code = await process.wait()
        finally:
            await self._stop(process)

        if return_code == 0:
            success_message = f"'{request.url}' downloaded successfully to '{destination}'."
            logger.info(success_message)
            return Right(success_message)

        error_message = f"yt-dlp process exited with code {return_code}"
        logger.error(f"Download of '{request.url}' failed: {error_message}")
        return Left(DownloaderError(error_message, exit_code=return_code, stderr="".join(stderr_parts)))
