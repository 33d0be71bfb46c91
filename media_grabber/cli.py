import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from pymonad.either import Either, Left, Right
from rich.console import Console
from rich.markup import escape

from media_grabber.adapters.ytdlp_adapter import YTDLPAdapter
from media_grabber.config import Settings, load_settings
from media_grabber.domain.errors import AppError, DirectoryError, DownloaderError
from media_grabber.domain.models import DownloadMode, DownloadRequest
from media_grabber.domain.ports import MediaDownloader
from media_grabber.i18n import get_message, set_lang
from media_grabber.logger_config import setup_logger
from media_grabber.prompt import Prompter, handle_termination
from media_grabber.storage import create_download_directory, log_error_to_file

# Initialization
console = Console()
logger = logging.getLogger(__name__)

UNKNOWN_PLAYLIST_NAME = "unknown-playlist"
MENU_RULE = "========================"

app = typer.Typer(
    name="media-grabber",
    help=get_message("help_app"),
    add_completion=False,
)


def _handle_error(error: AppError) -> None:
    """Displays a formatted error message and exits the application."""
    console.print(f"[bold red]Error:[/bold red] {escape(error.message)}")
    raise typer.Exit(code=1)


class DownloadSession:
    """One interactive run: pick a mode, enter a URL, download into a fresh directory."""

    def __init__(self, prompter: Prompter, downloader: MediaDownloader, settings: Settings, console: Console):
        self._prompter = prompter
        self._downloader = downloader
        self._settings = settings
        self._console = console

    def _show_menu(self) -> None:
        self._console.print(f"[bold cyan]{get_message('title')}[/bold cyan]")
        self._console.print(MENU_RULE)
        for mode in DownloadMode:
            self._console.print(f"{mode.key}. {mode.label}")
        self._console.print(MENU_RULE)

    def prompt_request(self) -> Optional[DownloadRequest]:
        """Asks for the mode and URL. Returns None when the session should stop."""
        selection = self._prompter.ask(get_message("select_prompt"))
        mode = DownloadMode.from_selection(selection)
        if mode is None:
            logger.info(f"Invalid menu selection: {selection!r}")
            self._console.print(f"[yellow]{get_message('invalid_selection')}[/yellow]")
            return None
        self._console.print(get_message("selected", label=mode.label))

        url = self._prompter.ask(get_message("url_prompt")).strip()
        if not url:
            self._console.print(f"[yellow]{get_message('no_url')}[/yellow]")
            return None
        return DownloadRequest(mode=mode, url=url)

    async def _playlist_name(self, request: DownloadRequest) -> Optional[str]:
        if not request.is_playlist:
            return None

        result = await self._downloader.probe_playlist_name(request.url)
        if result.is_nothing():
            self._console.print(f"[yellow]{get_message('playlist_name_fallback')}[/yellow]")
            return UNKNOWN_PLAYLIST_NAME

        self._console.print(get_message("playlist_name_found", name=result.value))
        return result.value

    def _on_success(self, destination: Path) -> Either[AppError, Path]:
        self._console.print(f"\n[bold green]✓ {get_message('download_completed')}[/bold green]")
        self._console.print(get_message("files_saved", path=escape(str(destination))))
        return Right(destination)

    def _on_failure(self, error: DownloaderError, request: DownloadRequest, destination: Path) -> Either[AppError, Path]:
        self._console.print(f"[bold red]{get_message('error', error=escape(error.message))}[/bold red]")
        log_path = log_error_to_file(destination, request.url, error.log_payload)
        self._console.print(get_message("error_logged", path=escape(str(log_path))))
        return Left(error)

    async def execute(self, request: DownloadRequest) -> Either[AppError, Path]:
        """Resolves the playlist name, creates the destination and downloads into it."""
        playlist_name = await self._playlist_name(request)

        try:
            destination = create_download_directory(
                self._settings.root, request.format, request.is_playlist, playlist_name
            )
        except OSError as e:
            logger.error(f"Could not create download directory: {e}")
            error = DirectoryError(get_message("directory_error", error=e))
            self._console.print(f"[bold red]{get_message('error', error=escape(error.message))}[/bold red]")
            return Left(error)

        result = await self._downloader.download(request, destination)
        return result.either(
            lambda error: self._on_failure(error, request, destination),
            lambda _: self._on_success(destination),
        )

    def run(self) -> Optional[Either[AppError, Path]]:
        self._show_menu()
        request = self.prompt_request()
        if request is None:
            return None
        logger.info(f"Starting {request.mode.name} download for URL: {request.url}")
        return asyncio.run(self.execute(request))


@app.command()
def main():
    """Interactively download a video, audio track or playlist with yt-dlp."""
    settings = load_settings().either(_handle_error, lambda loaded: loaded)

    setup_logger(settings.log_level)
    if settings.lang:
        set_lang(settings.lang)

    downloader = YTDLPAdapter(
        command=settings.downloader_command,
        cookie_file=settings.cookie_file,
        probe_timeout=settings.probe_timeout,
        socket_timeout=settings.socket_timeout,
        console=console,
    )

    prompter = Prompter(console)
    with handle_termination(prompter, console), prompter:
        try:
            DownloadSession(prompter, downloader, settings, console).run()
        except Exception as e:
            logger.critical(f"Unexpected error: {e}", exc_info=True)
            console.print(f"[bold red]{get_message('fatal_error', error=escape(str(e)))}[/bold red]")
            raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
