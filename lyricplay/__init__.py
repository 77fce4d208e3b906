"""
Lyricplay - A Python library for playing song lyrics in the terminal.

This package reveals lyrics word by word with per-line timing and ANSI
colors, and looks up song metadata from the web with a local file cache.

Basic usage:
    >>> from lyricplay import ANH_VUI, LyricsRenderer, get_song_info
    >>> info = get_song_info(ANH_VUI)
    >>> LyricsRenderer.for_song(ANH_VUI).render()
"""

__version__ = "1.0.0"
__license__ = "Apache-2.0"

from .lyricplay import (
    Colors,
    ColorPolicy,
    ContentColorPolicy,
    EmptyLyricsError,
    IndexColorPolicy,
    LyricLine,
    LyricplayError,
    LyricsRenderer,
    NoColorPolicy,
    Song,
    SongInfo,
    SongInfoCache,
    clear_screen,
    fetch_song_info,
    get_song_info,
)
from .songs import ANH_VUI, NHU_ANH_DA_THAY_EM, SONGS

__all__ = [
    "ANH_VUI",
    "NHU_ANH_DA_THAY_EM",
    "SONGS",
    "Colors",
    "ColorPolicy",
    "ContentColorPolicy",
    "EmptyLyricsError",
    "IndexColorPolicy",
    "LyricLine",
    "LyricplayError",
    "LyricsRenderer",
    "NoColorPolicy",
    "Song",
    "SongInfo",
    "SongInfoCache",
    "clear_screen",
    "fetch_song_info",
    "get_song_info",
]
