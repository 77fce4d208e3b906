#!/usr/bin/env python
"""
Example usage of the Lyricplay library.

This script plays both built-in songs one after the other.
"""

import sys

from lyricplay import SONGS
from lyricplay.cli import play_song


def main() -> int:
    """Run the example code."""
    for song in SONGS.values():
        result = play_song(song)
        if result != 0:
            return result
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
