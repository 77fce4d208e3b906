"""
Tests for the lyricplay command line interface.
"""

import io
import os
import tempfile
from unittest import mock

import pytest

from lyricplay import ANH_VUI, NHU_ANH_DA_THAY_EM, Colors, SongInfo
from lyricplay.cli import (
    EXIT_INTERRUPTED,
    build_song,
    create_parser,
    list_songs,
    load_lyrics_file,
    main,
    play_song,
    print_header,
)
from lyricplay.lyricplay import (
    IndexColorPolicy,
    LyricsRenderer,
    NoColorPolicy,
    Song,
    SongInfoCache,
)


@pytest.fixture
def temp_file():
    """
    Create a temporary file for testing.

    Yields:
        Path to the temporary file.
    """
    with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as f:
        path = f.name

    yield path
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def no_wait():
    """Make renderer waits return immediately."""
    with mock.patch.object(LyricsRenderer, "_wait", return_value=False) as patched:
        yield patched


class TestPrintHeader:
    """Tests for the print_header function."""

    def test_default_colors(self):
        """Test the header of a song without a header color."""
        output = io.StringIO()
        print_header(SongInfo(7, "Anh Vui", "Phạm Kỳ"), output=output)

        lines = output.getvalue().split("\n")
        assert lines[0] == f"{Colors.GREEN}=== Song Lyrics: Anh Vui ==={Colors.RESET}"
        assert lines[1] == f"{Colors.CYAN}Artist: Phạm Kỳ{Colors.RESET}"
        assert lines[2] == f"{Colors.CYAN}Total Lines: 7{Colors.RESET}"
        assert lines[3] == ""
        assert "Starting lyrics display (press Ctrl+C to exit)..." in lines[4]
        assert lines[4].startswith(Colors.YELLOW)

    def test_single_header_color(self):
        """Test the header of a song with a header color."""
        output = io.StringIO()
        print_header(SongInfo(10, "Title", "Artist"), Colors.WHITE, output)

        for line in output.getvalue().split("\n"):
            if line:
                assert line.startswith(Colors.WHITE)


class TestPlaySong:
    """Tests for the play_song function."""

    def test_play_song(self, temp_file, no_wait):
        """Test playing a built-in song end to end."""
        output = io.StringIO()
        fetcher = mock.MagicMock(return_value=("Anh Vui", "Phạm Kỳ"))

        result = play_song(
            ANH_VUI, cache=SongInfoCache(temp_file), fetcher=fetcher, output=output
        )

        text = output.getvalue()
        assert result == 0
        assert "=== Song Lyrics: Anh Vui ===" in text
        assert "Total Lines: 7" in text
        assert f"{Colors.BLUE}vui{Colors.RESET}" in text
        assert no_wait.call_count == sum(len(line.split()) for line in ANH_VUI.lines)
        fetcher.assert_called_once_with(ANH_VUI.source_url)

    def test_play_song_without_info(self, temp_file, no_wait):
        """Test hiding the header."""
        output = io.StringIO()

        play_song(
            NHU_ANH_DA_THAY_EM,
            cache=SongInfoCache(temp_file),
            fetcher=mock.MagicMock(return_value=None),
            show_info=False,
            output=output,
        )

        assert "Song Lyrics" not in output.getvalue()
        assert "Và" in output.getvalue()

    def test_play_song_empty_lyrics(self, temp_file):
        """Test that a song without lyrics is not played."""
        output = io.StringIO()
        fetcher = mock.MagicMock()
        song = Song("empty", (), "https://example.com", "T", "A")

        result = play_song(
            song, cache=SongInfoCache(temp_file), fetcher=fetcher, output=output
        )

        assert result == 1
        assert output.getvalue().startswith(f"{Colors.RED}Error: ")
        fetcher.assert_not_called()

    def test_play_song_interrupted(self, temp_file):
        """Test the exit code of an interrupted playback."""
        output = io.StringIO()
        with mock.patch.object(LyricsRenderer, "_wait", return_value=True):
            result = play_song(
                ANH_VUI,
                cache=SongInfoCache(temp_file),
                fetcher=mock.MagicMock(return_value=None),
                output=output,
            )

        assert result == EXIT_INTERRUPTED
        assert output.getvalue().count("Interrupted!") == 1


class TestLoadLyricsFile:
    """Tests for the load_lyrics_file function."""

    def test_load_lyrics_file(self, temp_file):
        """Test reading lyric lines and dropping trailing blank lines."""
        with open(temp_file, "w", encoding="utf-8") as f:
            f.write("Dòng một\n\nDòng hai\n\n\n")

        assert load_lyrics_file(temp_file) == ["Dòng một", "", "Dòng hai"]

    def test_load_empty_file(self, temp_file):
        """Test reading an empty file."""
        assert load_lyrics_file(temp_file) == []


class TestBuildSong:
    """Tests for the build_song function."""

    def test_default_song(self):
        """Test that the default song is returned unchanged."""
        args = create_parser().parse_args([])

        assert build_song(args) is ANH_VUI

    def test_unknown_song(self, capsys):
        """Test selecting a song that does not exist."""
        args = create_parser().parse_args(["missing-song"])

        assert build_song(args) is None
        assert "Unknown song 'missing-song'" in capsys.readouterr().out

    def test_overrides(self, temp_file):
        """Test overriding lyrics, URL and colors."""
        with open(temp_file, "w", encoding="utf-8") as f:
            f.write("one\ntwo\n")
        args = create_parser().parse_args(
            [
                "nhu-anh-da-thay-em",
                "--load",
                temp_file,
                "--url",
                "https://example.com/song",
                "--colors",
                "none",
            ]
        )

        song = build_song(args)

        assert song.lines == ("one", "two")
        assert dict(song.line_delays) == {}
        assert song.source_url == "https://example.com/song"
        assert isinstance(song.color_policy, NoColorPolicy)
        assert song.fallback_title == NHU_ANH_DA_THAY_EM.fallback_title

    def test_index_colors_override(self):
        """Test switching a song to index colors."""
        args = create_parser().parse_args(["anh-vui", "--colors", "index"])

        assert isinstance(build_song(args).color_policy, IndexColorPolicy)

    def test_missing_lyrics_file(self, capsys):
        """Test loading lyrics from a file that does not exist."""
        args = create_parser().parse_args(["--load", "/nonexistent/lyrics.txt"])

        assert build_song(args) is None
        assert "Could not read" in capsys.readouterr().out


class TestMain:
    """Tests for the main function."""

    def test_list(self, capsys):
        """Test listing the built-in songs."""
        with mock.patch("sys.argv", ["lyricplay", "--list"]):
            assert main() == 0

        out = capsys.readouterr().out
        assert "anh-vui" in out
        assert "nhu-anh-da-thay-em" in out

    def test_list_songs_output(self):
        """Test the song list format."""
        output = io.StringIO()
        list_songs(output)

        assert "Phạm Kỳ, 7 lines" in output.getvalue()

    def test_unknown_song(self):
        """Test the exit code for an unknown song."""
        with mock.patch("sys.argv", ["lyricplay", "nope"]):
            assert main() == 1

    def test_empty_lyrics_file(self, temp_file, capsys):
        """Test that an empty lyrics file prints an error and does not play."""
        with (
            mock.patch("sys.argv", ["lyricplay", "--load", temp_file]),
            mock.patch("lyricplay.cli.fetch_song_info") as mock_fetch,
        ):
            assert main() == 1

        assert "Error: " in capsys.readouterr().out
        mock_fetch.assert_not_called()

    def test_main_plays_song(self, temp_file):
        """Test that main passes its options to play_song."""
        argv = [
            "lyricplay",
            "nhu-anh-da-thay-em",
            "--cache-file",
            temp_file,
            "--timeout",
            "2.5",
            "--no-info",
        ]
        with (
            mock.patch("sys.argv", argv),
            mock.patch("lyricplay.cli.play_song", return_value=0) as mock_play,
        ):
            assert main() == 0

        args, kwargs = mock_play.call_args
        assert args[0] is NHU_ANH_DA_THAY_EM
        assert kwargs["cache"].cache_file_path == temp_file
        assert kwargs["fetcher"].keywords == {"timeout": 2.5}
        assert kwargs["show_info"] is False

    def test_main_keyboard_interrupt(self, capsys):
        """Test Ctrl+C while looking up song info."""
        with (
            mock.patch("sys.argv", ["lyricplay"]),
            mock.patch("lyricplay.cli.play_song", side_effect=KeyboardInterrupt),
        ):
            assert main() == EXIT_INTERRUPTED

        assert "Interrupted!" in capsys.readouterr().out
