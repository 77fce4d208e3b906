#!/usr/bin/env python
"""CLI tool for the lyricplay package - play song lyrics word by word."""

import argparse
import dataclasses
import functools
import logging
import sys
from typing import Callable, List, Optional, TextIO, Tuple

from . import __version__
from .lyricplay import (
    SONG_INFO_CACHE_PATH,
    FETCH_TIMEOUT,
    Colors,
    ContentColorPolicy,
    EmptyLyricsError,
    IndexColorPolicy,
    LyricsRenderer,
    NoColorPolicy,
    Song,
    SongInfo,
    SongInfoCache,
    fetch_song_info,
    get_song_info,
)
from .songs import LINE_PALETTE, NEGATIVE_PHRASES, POSITIVE_PHRASES, SONGS

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130

COLOR_POLICIES = {
    "content": lambda: ContentColorPolicy(POSITIVE_PHRASES, NEGATIVE_PHRASES),
    "index": lambda: IndexColorPolicy(LINE_PALETTE),
    "none": NoColorPolicy,
}


def print_header(
    song_info: SongInfo,
    header_color: Optional[str] = None,
    output: Optional[TextIO] = None,
) -> None:
    """Print the song title, artist and line count before playback."""
    output = output if output is not None else sys.stdout
    title_color = header_color or Colors.GREEN
    info_color = header_color or Colors.CYAN
    prompt_color = header_color or Colors.YELLOW

    print(
        f"{title_color}=== Song Lyrics: {song_info.title} ==={Colors.RESET}",
        file=output,
    )
    print(f"{info_color}Artist: {song_info.artist}{Colors.RESET}", file=output)
    print(
        f"{info_color}Total Lines: {song_info.total_lines}{Colors.RESET}\n",
        file=output,
    )
    print(
        f"{prompt_color}Starting lyrics display "
        f"(press Ctrl+C to exit)...{Colors.RESET}",
        file=output,
        flush=True,
    )


def play_song(
    song: Song,
    cache: Optional[SongInfoCache] = None,
    fetcher: Optional[Callable[[str], Optional[Tuple[str, str]]]] = None,
    show_info: bool = True,
    output: Optional[TextIO] = None,
) -> int:
    """
    Resolve a song's metadata, print the header and play its lyrics.

    Returns:
        0 when playback finished, 1 for invalid lyrics, 130 when interrupted.
    """
    output = output if output is not None else sys.stdout
    try:
        renderer = LyricsRenderer.for_song(song, output=output)
    except EmptyLyricsError as e:
        logger.error("Error initializing printer: Invalid lyrics provided: %s", e)
        print(f"{Colors.RED}Error: {e.message}{Colors.RESET}", file=output)
        return 1

    song_info = get_song_info(song, cache, fetcher)
    if show_info:
        print_header(song_info, song.header_color, output)

    return 0 if renderer.render() else EXIT_INTERRUPTED


def load_lyrics_file(file_path: str) -> List[str]:
    """Read lyric lines from a text file, dropping trailing blank lines."""
    with open(file_path, "r", encoding="utf-8") as file_stream:
        lines = file_stream.read().splitlines()

    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def list_songs(output: Optional[TextIO] = None) -> None:
    """Print the built-in songs."""
    output = output if output is not None else sys.stdout
    print(f"{Colors.BOLD}Available songs:{Colors.RESET}", file=output)
    for slug, song in SONGS.items():
        print(
            f"  {Colors.CYAN}{slug}{Colors.RESET} - {song.fallback_title} "
            f"({song.fallback_artist}, {len(song.lines)} lines)",
            file=output,
        )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Play song lyrics word by word in the terminal"
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "song", nargs="?", default="anh-vui", help="Slug of the song to play"
    )
    parser.add_argument("--list", action="store_true", help="List built-in songs")
    parser.add_argument("--load", default=None, help="Load lyrics from a text file")
    parser.add_argument("--url", default=None, help="Page to fetch song info from")
    parser.add_argument(
        "--colors",
        default="song",
        choices=["song", "content", "index", "none"],
        help="Color policy for lyric lines",
    )
    parser.add_argument(
        "--cache-file", default=SONG_INFO_CACHE_PATH, help="Song info cache file"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=FETCH_TIMEOUT,
        help="Timeout in seconds for fetching song info",
    )
    parser.add_argument("--no-info", action="store_true", help="Hide song information")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def build_song(args) -> Optional[Song]:
    """Get the selected song with command line overrides applied."""
    song = SONGS.get(args.song)
    if song is None:
        print(
            f"{Colors.RED}Error: Unknown song '{args.song}'. "
            f"Use --list to see available songs.{Colors.RESET}"
        )
        return None

    changes = {}
    if args.load:
        try:
            changes["lines"] = load_lyrics_file(args.load)
        except (OSError, UnicodeDecodeError) as e:
            print(f"{Colors.RED}Error: Could not read {args.load}: {e}{Colors.RESET}")
            return None
        changes["line_delays"] = {}
    if args.url:
        changes["source_url"] = args.url
    if args.colors != "song":
        changes["color_policy"] = COLOR_POLICIES[args.colors]()

    return dataclasses.replace(song, **changes) if changes else song


def main() -> int:
    """Main function for the CLI tool."""
    parser = create_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger("lyricplay").setLevel(logging.DEBUG)

    if args.list:
        list_songs()
        return 0

    song = build_song(args)
    if song is None:
        return 1

    try:
        return play_song(
            song,
            cache=SongInfoCache(args.cache_file),
            fetcher=functools.partial(fetch_song_info, timeout=args.timeout),
            show_info=not args.no_info,
        )
    except KeyboardInterrupt:
        print(f"\n{Colors.RED}Interrupted!{Colors.RESET}")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
