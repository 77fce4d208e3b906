#!/usr/bin/env python3
"""
Basic usage example for Lyricplay library.

This example demonstrates how to look up song info and play a built-in song.
"""

from lyricplay import ANH_VUI, LyricsRenderer, SongInfo, get_song_info


def main() -> None:
    """
    Basic usage example for Lyricplay library.

    This example demonstrates how to look up song info and play a built-in song.
    """
    # 1. Look up title and artist (cached in song_info_cache.txt)
    info = get_song_info(ANH_VUI)
    display_song_info(info)

    # 2. Play the lyrics word by word
    renderer = LyricsRenderer.for_song(ANH_VUI)
    if not renderer.render():
        print("Playback stopped early")


def display_song_info(info: SongInfo) -> None:
    """
    Display song information.
    """
    print(f"Title: {info.title}")
    print(f"Artist: {info.artist}")
    print(f"Lines: {info.total_lines}")
    print("-" * 40)


if __name__ == "__main__":
    main()
