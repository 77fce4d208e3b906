"""
Lyricplay: timed word-by-word lyrics playback for the terminal.

This module provides the song metadata cache, the web page fetcher that
scrapes song title and artist, and the renderer that reveals lyrics word by
word with ANSI colors.
"""

import logging
import os
import subprocess
import sys
import threading
import urllib.request
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, TextIO, Tuple
from urllib.error import HTTPError

from bs4 import BeautifulSoup

from . import __version__

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SONG_INFO_CACHE_PATH = "song_info_cache.txt"
FETCH_TIMEOUT = 5.0
DEFAULT_LINE_DELAY = 3500
CLEAR_SEQUENCE = "\033[H\033[2J"

TITLE_SELECTOR = ".info-top-play h1.txt-primary"
ARTIST_SELECTOR = ".info-top-play h2 a"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"


class LyricplayError(Exception):
    """
    Exception raised for errors in the Lyricplay library.
    """

    def __init__(self, code: int, name: str, message: str):
        """
        Initialize a new LyricplayError instance.

        Args:
            code: The error code.
            name: The error name.
            message: The error message.
        """
        self.code = code
        self.name = name
        self.message = message
        super().__init__(f"{code} {name}: {message}")


class EmptyLyricsError(LyricplayError):
    """
    Exception raised when a renderer is created without any lyrics.
    """

    def __init__(self, message: str = "Lyrics cannot be empty"):
        super().__init__(400, "EmptyLyricsError", message)


@dataclass(frozen=True)
class SongInfo:
    """Song metadata shown in the playback header."""

    total_lines: int
    title: str
    artist: str


@dataclass(frozen=True)
class LyricLine:
    """
    A single lyric line prepared for playback.

    The words are the whitespace split of the text. A blank line still
    yields one empty word so that it takes up its share of time.
    """

    text: str
    index: int
    delay_ms: int
    words: Tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "words", tuple(self.text.split()) or ("",))

    @property
    def word_delay_ms(self) -> int:
        """Milliseconds to wait after each word of the line."""
        return self.delay_ms // max(1, len(self.words))

    @classmethod
    def from_text(
        cls,
        text: str,
        index: int,
        line_delays: Mapping[int, int],
        default_delay: int = DEFAULT_LINE_DELAY,
    ) -> "LyricLine":
        """
        Create a LyricLine, looking up its duration in a delay table.

        Args:
            text: The lyric text.
            index: Zero-based position of the line in the song.
            line_delays: Mapping of line index to duration in milliseconds.
            default_delay: Duration used for indices missing from the table.

        Returns:
            A new LyricLine instance.
        """
        delay_ms = line_delays.get(index, default_delay)
        return cls(text=text, index=index, delay_ms=delay_ms)


class ColorPolicy:
    """Assigns an ANSI color prefix to a rendered lyric line."""

    def color_for(self, line: str, index: int) -> str:
        """
        Get the color for a line.

        Args:
            line: The full text of the line.
            index: Zero-based position of the line.

        Returns:
            An ANSI escape prefix, or an empty string for no color.
        """
        raise NotImplementedError


class NoColorPolicy(ColorPolicy):
    """Leaves every line uncolored."""

    def color_for(self, line: str, index: int) -> str:
        return ""


class ContentColorPolicy(ColorPolicy):
    """
    Colors a line by the phrases it contains.

    Positive phrases win over negative ones. Matching is done on the
    lowercased line, so every word of the line gets the same color.
    """

    def __init__(
        self,
        positive: Iterable[str],
        negative: Iterable[str],
        positive_color: str = Colors.BLUE,
        negative_color: str = Colors.RED,
    ):
        self.positive = frozenset(phrase.lower() for phrase in positive)
        self.negative = frozenset(phrase.lower() for phrase in negative)
        self.positive_color = positive_color
        self.negative_color = negative_color

    def color_for(self, line: str, index: int) -> str:
        lower_line = line.lower()
        if any(phrase in lower_line for phrase in self.positive):
            return self.positive_color
        if any(phrase in lower_line for phrase in self.negative):
            return self.negative_color
        return ""


class IndexColorPolicy(ColorPolicy):
    """Cycles through a palette by line index."""

    def __init__(self, palette: Sequence[str]):
        if not palette:
            raise ValueError("Palette cannot be empty")
        self.palette = tuple(palette)

    def color_for(self, line: str, index: int) -> str:
        return self.palette[index % len(self.palette)]


@dataclass(frozen=True)
class Song:
    """
    Everything needed to play one song.

    The delay table is stored read-only and handed to the renderer, so two
    songs never share playback state.
    """

    slug: str
    lines: Tuple[str, ...]
    source_url: str
    fallback_title: str
    fallback_artist: str
    line_delays: Mapping[int, int] = field(default_factory=dict)
    color_policy: ColorPolicy = field(default_factory=NoColorPolicy)
    header_color: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))
        delays = MappingProxyType(dict(self.line_delays))
        object.__setattr__(self, "line_delays", delays)


def clear_screen(output: Optional[TextIO] = None) -> None:
    """
    Clear the terminal screen.

    Failures are logged and ignored.

    Args:
        output: Stream to write the clear sequence to. Defaults to stdout.
    """
    if output is None:
        output = sys.stdout
    try:
        if os.name == "nt":
            subprocess.run(["cmd", "/c", "cls"], check=True)
        else:
            output.write(CLEAR_SEQUENCE)
            output.flush()
    except (OSError, subprocess.CalledProcessError) as e:
        logger.warning("Failed to clear screen: %s", e)


class LyricsRenderer:
    """
    Prints lyrics word by word with a delay after every word.

    Each line has a total duration taken from the delay table, split evenly
    across its words. Waiting happens on a threading.Event so that playback
    can be stopped from another thread with cancel() or with Ctrl+C.
    """

    def __init__(
        self,
        lines: Optional[Sequence[str]],
        line_delays: Optional[Mapping[int, int]] = None,
        color_policy: Optional[ColorPolicy] = None,
        default_delay: int = DEFAULT_LINE_DELAY,
        output: Optional[TextIO] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the renderer.

        Args:
            lines: The lyric lines in playback order.
            line_delays: Mapping of line index to duration in milliseconds.
            color_policy: Policy picking the color of each line.
            default_delay: Duration for lines missing from the delay table.
            output: Stream to print to. Defaults to stdout.
            stop_event: Event used for waiting and cancellation.

        Raises:
            EmptyLyricsError: If no lyric lines are given.
        """
        if not lines:
            raise EmptyLyricsError("Lyrics array cannot be null or empty")

        delays = MappingProxyType(dict(line_delays or {}))
        self.lines: List[LyricLine] = [
            LyricLine.from_text(text, index, delays, default_delay)
            for index, text in enumerate(lines)
        ]
        self.color_policy = color_policy or NoColorPolicy()
        self.output = output if output is not None else sys.stdout
        self._stop_event = stop_event if stop_event is not None else threading.Event()

    @classmethod
    def for_song(cls, song: Song, **kwargs) -> "LyricsRenderer":
        """Create a renderer configured with a song's lyrics, delays and colors."""
        return cls(song.lines, song.line_delays, song.color_policy, **kwargs)

    def cancel(self) -> None:
        """Stop playback at the next wait."""
        self._stop_event.set()

    def format_word(self, word: str, line: LyricLine) -> str:
        """Wrap a word in the color chosen for its line."""
        color = self.color_policy.color_for(line.text, line.index)
        if not color:
            return word
        return f"{color}{word}{Colors.RESET}"

    def _wait(self, milliseconds: int) -> bool:
        """Wait for the given time. Returns True if playback was cancelled."""
        return self._stop_event.wait(milliseconds / 1000)

    def _print_line(self, line: LyricLine) -> bool:
        for word in line.words:
            self.output.write(self.format_word(word, line) + " ")
            self.output.flush()
            if self._wait(line.word_delay_ms):
                return False
        return True

    def render(self) -> bool:
        """
        Play all lyric lines.

        Returns:
            True if every line was printed, False if playback was interrupted.
        """
        clear_screen(self.output)
        try:
            for line in self.lines:
                if not self._print_line(line):
                    break
                self.output.write("\n")
            else:
                self.output.flush()
                return True
        except KeyboardInterrupt:
            pass

        logger.error("Lyrics printing interrupted")
        self.output.write(f"\n{Colors.RED}Interrupted!{Colors.RESET}\n")
        self.output.flush()
        return False


def _html_get(url: str, timeout: float = FETCH_TIMEOUT) -> str:
    """
    Make a GET request to the given URL and return the decoded HTML.

    Args:
        url: The URL to request.
        timeout: Socket timeout in seconds.

    Returns:
        The response body as text.

    Raises:
        LyricplayError: If the server returns an HTTP error.
        Exception: For other errors.
    """
    req = urllib.request.Request(
        url,
        headers={"User-Agent": f"Mozilla/5.0 (compatible; Lyricplay/{__version__})"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            charset = response.headers.get_content_charset() or "utf-8"
            return response.read().decode(charset, errors="replace")
    except HTTPError as e:
        raise LyricplayError(e.code, "HTTPError", str(e.reason)) from e


def parse_song_info(html: str) -> Optional[Tuple[str, str]]:
    """
    Extract the song title and artist from a playback page.

    Args:
        html: The page HTML.

    Returns:
        A (title, artist) tuple, or None if either field is missing.
    """
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.select_one(TITLE_SELECTOR)
    title = title_tag.get_text(strip=True) if title_tag else ""
    artists = [tag.get_text(strip=True) for tag in soup.select(ARTIST_SELECTOR)]
    artist = ", ".join(name for name in artists if name)

    if not title or not artist:
        return None
    return title, artist


def fetch_song_info(
    url: str, timeout: float = FETCH_TIMEOUT
) -> Optional[Tuple[str, str]]:
    """
    Fetch the song title and artist from a web page.

    Never raises: network, HTTP and parse failures are logged and reported
    as None so the caller can fall back to defaults.

    Args:
        url: The page URL.
        timeout: Socket timeout in seconds.

    Returns:
        A (title, artist) tuple, or None on failure.
    """
    try:
        info = parse_song_info(_html_get(url, timeout))
    except Exception as e:
        logger.warning("Failed to fetch song info from %s: %s", url, e)
        return None

    if info is None:
        logger.warning("Song info not found on %s", url)
    return info


class SongInfoCache:
    """
    Single-record cache of song metadata stored in a text file.

    The file holds three lines: source URL, title and artist. Storing a new
    record replaces the previous one.
    """

    def __init__(self, cache_file_path: str):
        """
        Initialize the song info cache.

        Args:
            cache_file_path: Path to the text file used for caching.
        """
        self.cache_file_path = cache_file_path

    def load(self) -> Optional[Tuple[str, str, str]]:
        """
        Read the cached record.

        Returns:
            A (url, title, artist) tuple, or None if the file is missing,
            unreadable or incomplete.
        """
        if not os.path.exists(self.cache_file_path):
            return None

        try:
            with open(self.cache_file_path, "r", encoding="utf-8") as file_stream:
                lines = file_stream.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read cache file %s: %s", self.cache_file_path, e)
            return None

        if len(lines) < 3 or not lines[1] or not lines[2]:
            logger.debug("Ignoring incomplete cache file %s", self.cache_file_path)
            return None
        return lines[0], lines[1], lines[2]

    def store(self, url: str, title: str, artist: str) -> None:
        """
        Replace the cached record.

        Args:
            url: The source URL.
            title: The song title.
            artist: The artist name.
        """
        try:
            with open(self.cache_file_path, "w", encoding="utf-8") as file_stream:
                file_stream.write(f"{url}\n{title}\n{artist}\n")
            logger.debug("Cache written to %s", self.cache_file_path)
        except OSError as e:
            logger.warning("Failed to cache song info for URL %s: %s", url, e)

    def resolve(
        self,
        url: str,
        line_count: int,
        fetcher: Optional[Callable[[str], Optional[Tuple[str, str]]]] = None,
        fallback_title: str = "",
        fallback_artist: str = "",
    ) -> SongInfo:
        """
        Get song info from the cache, or fetch and cache it.

        Args:
            url: The page to take the metadata from.
            line_count: Number of lyric lines of the song.
            fetcher: Callable returning (title, artist) for a URL, or None.
            fallback_title: Title used when fetching fails.
            fallback_artist: Artist used when fetching fails.

        Returns:
            The resolved SongInfo.
        """
        record = self.load()
        if record and record[0] == url:
            return SongInfo(line_count, record[1], record[2])

        fetcher = fetcher or fetch_song_info
        try:
            info = fetcher(url)
        except Exception as e:
            logger.warning("Failed to fetch song info from %s: %s", url, e)
            info = None

        if info and all(info):
            title, artist = info
        else:
            logger.info("Using fallback song info for %s", url)
            title, artist = fallback_title, fallback_artist

        self.store(url, title, artist)
        return SongInfo(line_count, title, artist)


song_info_cache = SongInfoCache(SONG_INFO_CACHE_PATH)


def get_song_info(
    song: Song,
    cache: Optional[SongInfoCache] = None,
    fetcher: Optional[Callable[[str], Optional[Tuple[str, str]]]] = None,
) -> SongInfo:
    """
    Get the metadata of a song.

    Args:
        song: The song to look up.
        cache: Cache to use. Defaults to the shared song_info_cache.
        fetcher: Callable returning (title, artist) for a URL.

    Returns:
        The resolved SongInfo.
    """
    cache = cache or song_info_cache
    return cache.resolve(
        song.source_url,
        len(song.lines),
        fetcher=fetcher,
        fallback_title=song.fallback_title,
        fallback_artist=song.fallback_artist,
    )
