#!/usr/bin/env python3
"""
Example for playing your own lyrics with Lyricplay.

This example demonstrates how to configure delays, colors and metadata
for a new song, and how to stop playback from another thread.
"""

import threading

from lyricplay import Colors, IndexColorPolicy, LyricsRenderer, Song, SongInfoCache
from lyricplay.cli import print_header


def main() -> None:
    """Play a custom song and cancel it after five seconds."""
    song = Song(
        slug="twinkle",
        lines=(
            "Twinkle twinkle little star",
            "How I wonder what you are",
            "Up above the world so high",
            "Like a diamond in the sky",
        ),
        source_url="https://example.com/twinkle",
        fallback_title="Twinkle Twinkle Little Star",
        fallback_artist="Traditional",
        line_delays={0: 2000, 1: 2000, 2: 2500},
        color_policy=IndexColorPolicy((Colors.YELLOW, Colors.CYAN)),
    )

    # No real page exists, so the fallback title and artist are used
    cache = SongInfoCache("example_song_info_cache.txt")
    info = cache.resolve(
        song.source_url,
        len(song.lines),
        fetcher=lambda url: None,
        fallback_title=song.fallback_title,
        fallback_artist=song.fallback_artist,
    )

    renderer = LyricsRenderer.for_song(song)
    timer = threading.Timer(5.0, renderer.cancel)
    timer.start()

    print_header(info, Colors.WHITE)
    finished = renderer.render()
    timer.cancel()
    print("Finished" if finished else "Cancelled after 5 seconds")


if __name__ == "__main__":
    main()
