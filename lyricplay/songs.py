"""Built-in songs."""

from typing import Dict

from .lyricplay import Colors, ContentColorPolicy, IndexColorPolicy, Song

POSITIVE_PHRASES = ("cảm ơn", "hạnh phúc", "vui", "tự hào", "xinh")
NEGATIVE_PHRASES = ("nước mắt", "nghẹn ngào", "chẳng ra sao", "làm gì xứng đáng")

LINE_PALETTE = (Colors.GREEN, Colors.RED, Colors.WHITE)

ANH_VUI = Song(
    slug="anh-vui",
    lines=(
        "Anh vui ",
        "sao nước mắt cứ tuôn trào",
        "Chẳng phải như thế quá tốt hay sao",
        "Anh ta đáng giá nhường nào ",
        "Ngược lại nhìn anh trông chẳng ra sao",
        "Cũng đúng thôi",
        "Anh làm gì xứng đáng với em...",
    ),
    source_url="https://zingmp3.vn/album/ANH-VUI-Single-Pham-Ky/6BDIEE7A.html",
    fallback_title="Cảm ơn vì em ngỏ lời mời",
    fallback_artist="Phạm Kỳ",
    line_delays={0: 1200, 1: 1300, 2: 3750, 3: 1900, 4: 3500, 5: 2600, 6: 5000},
    color_policy=ContentColorPolicy(POSITIVE_PHRASES, NEGATIVE_PHRASES),
)

NHU_ANH_DA_THAY_EM = Song(
    slug="nhu-anh-da-thay-em",
    lines=(
        "Và một lần cuối",
        "Để mình không cần mạnh mẽ",
        "Dù sao ta cũng đã yêu nhiều thế !",
        "Có rất nhiều điều",
        "Mà anh vẫn chưa nói ra...",
        "Vì lần cuối cùng được nắm tay em bước qua khắp nẻo đường",
        "Ngắm hoàng hôn chạm bờ vai em",
        "Như khoảnh khắc đầu tiên em đến",
        "Anh cất nụ cười người vào trang kỉ niệm",
        "Như em vẫn còn bên anh...",
    ),
    source_url=(
        "https://zingmp3.vn/album/"
        "Nhu-Anh-Da-Thay-Em-Single-PhucXP-Freak-D/6B6E88W9.html"
    ),
    fallback_title="Như Anh Đã Thấy Em",
    fallback_artist="PhúcXP, Freak D",
    line_delays={
        0: 1200,
        1: 1300,
        2: 3750,
        3: 1900,
        4: 3000,
        5: 2600,
        6: 5000,
        7: 3500,
        8: 4000,
        9: 3000,
    },
    color_policy=IndexColorPolicy(LINE_PALETTE),
    header_color=Colors.WHITE,
)

SONGS: Dict[str, Song] = {song.slug: song for song in (ANH_VUI, NHU_ANH_DA_THAY_EM)}
