# i18n.py
import locale
from collections import ChainMap

MESSAGES = {
    "en": {
        "title": "YouTube Media Downloader",
        "select_prompt": "Select download type (1-4): ",
        "invalid_selection": "Invalid selection. Please enter a number between 1 and 4.",
        "selected": "You selected: {label}",
        "url_prompt": "Enter the YouTube URL: ",
        "no_url": "No URL provided. Exiting.",
        "playlist_name_fallback": "Could not extract playlist name. Using generic name.",
        "playlist_name_found": "Playlist: {name}",
        "using_cookies": "Using cookies for authentication...",
        "downloading": "Downloading {media_type}...",
        "saving_to": "Saving to: {path}",
        "format": "Format: {format}",
        "download_completed": "Download completed successfully!",
        "files_saved": "Files saved in: {path}",
        "directory_error": "Could not create download directory: {error}",
        "error": "Error: {error}",
        "error_logged": "Error logged to: {path}",
        "fatal_error": "Fatal error: {error}",
        "interrupted": "Process interrupted. Exiting...",
        "terminated": "Process terminated. Exiting...",
        "help_app": "Interactively download a video, audio track or playlist with yt-dlp.",
    },
    "fr": {
        "title": "Téléchargeur de médias YouTube",
        "select_prompt": "Choisissez le type de téléchargement (1-4) : ",
        "invalid_selection": "Choix invalide. Veuillez saisir un nombre entre 1 et 4.",
        "selected": "Vous avez choisi : {label}",
        "url_prompt": "Saisissez l'URL YouTube : ",
        "no_url": "Aucune URL fournie. Fin du programme.",
        "playlist_name_fallback": "Impossible d'obtenir le nom de la playlist. Utilisation d'un nom générique.",
        "playlist_name_found": "Playlist : {name}",
        "using_cookies": "Utilisation des cookies pour l'authentification...",
        "downloading": "Téléchargement ({media_type})...",
        "saving_to": "Enregistrement dans : {path}",
        "format": "Format : {format}",
        "download_completed": "Téléchargement terminé avec succès !",
        "files_saved": "Fichiers enregistrés dans : {path}",
        "directory_error": "Impossible de créer le dossier de téléchargement : {error}",
        "error": "Erreur : {error}",
        "error_logged": "Erreur consignée dans : {path}",
        "fatal_error": "Erreur fatale : {error}",
        "interrupted": "Processus interrompu. Fin du programme...",
        "terminated": "Processus arrêté. Fin du programme...",
        "help_app": "Télécharger une vidéo, une piste audio ou une playlist avec yt-dlp.",
    },
}

_current_lang = "en"


def get_default_lang():
    try:
        lang_code, _ = locale.getlocale()
        return "fr" if lang_code and lang_code.startswith("fr") else "en"
    except (ValueError, TypeError):
        return "en"


def set_lang(lang: str):
    global _current_lang
    _current_lang = lang if lang in MESSAGES else "en"


def get_message(key, **kwargs):
    """Formats a console message in the current language, English filling any gap."""
    catalog = ChainMap(MESSAGES.get(_current_lang, {}), MESSAGES["en"])
    template = catalog.get(key, f"Translation missing for key: {key}")

    try:
        return template.format(**kwargs)
    except KeyError as e:
        return f"Formatting error for key '{key}': missing placeholder {e}"


# Initialize with default system language
set_lang(get_default_lang())
