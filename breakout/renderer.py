"""PIL-based frame renderer. Draws a game Snapshot, never touches the Game."""

from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

FONT_PATH = "/System/Library/Fonts/Helvetica.ttc"

COLOR_BG = "#0f172a"
COLOR_BRICK = "#6d0018"
COLOR_GLYPH = "#ffffff"
COLOR_PADDLE = "#af0034"
COLOR_BALL = "#ffffff"
COLOR_HUD = "#ffffff"
COLOR_HEART = "#ca1815"

OVERLAY = (0, 0, 0, 90)

MESSAGES = {
    "gameover": "Game Over",
    "won": "You Win",
}


@lru_cache(maxsize=16)
def _font(size: int) -> ImageFont.FreeTypeFont:
    try:
        return ImageFont.truetype(FONT_PATH, size)
    except OSError:
        return ImageFont.load_default()


def overlay_message(state: str, level: int) -> str | None:
    """Text shown over a paused field; None while the ball is in play."""
    if state == "running":
        return None
    if state in MESSAGES:
        return MESSAGES[state]
    return f"Press to start - Level {level + 1}"


def render_frame(snapshot, bg_color: str = COLOR_BG) -> Image.Image:
    """Render one frame at logical field resolution."""
    size = (int(snapshot.field_width), int(snapshot.field_height))
    img = Image.new("RGB", size, bg_color)
    d = ImageDraw.Draw(img)

    for b in snapshot.bricks:
        if not b.alive:
            continue
        d.rectangle([b.x, b.y, b.x + b.width - 1, b.y + b.height - 1],
                    fill=COLOR_BRICK)
        if b.glyph:
            d.text((b.x + b.width / 2, b.y + b.height / 2), b.glyph,
                   font=_font(int(b.height * 0.65)), fill=COLOR_GLYPH,
                   anchor="mm")

    p = snapshot.paddle
    d.rounded_rectangle([p.x, p.y, p.x + p.width, p.y + p.height],
                        radius=p.height / 2, fill=COLOR_PADDLE)

    ball = snapshot.ball
    d.ellipse([ball.x - ball.radius, ball.y - ball.radius,
               ball.x + ball.radius, ball.y + ball.radius], fill=COLOR_BALL)

    _draw_hud(d, snapshot, size[0])

    message = overlay_message(snapshot.state, snapshot.level)
    if message:
        img = _draw_overlay(img, message)
    return img


def _draw_hud(d: ImageDraw.ImageDraw, snapshot, width: int):
    font = _font(18)
    d.text((10, 8), f"Score: {snapshot.score}", font=font, fill=COLOR_HUD)
    d.text((10, 36), f"Level: {snapshot.level + 1}", font=font, fill=COLOR_HUD)
    d.text((width // 2, 8), f"Top Score: {snapshot.high_score}", font=font,
           fill=COLOR_HUD, anchor="mt")
    hearts = "❤" * max(0, snapshot.lives)
    if hearts:
        d.text((width - 10, 8), hearts, font=font, fill=COLOR_HEART, anchor="rt")


def _draw_overlay(img: Image.Image, message: str) -> Image.Image:
    shade = Image.new("RGBA", img.size, OVERLAY)
    out = Image.alpha_composite(img.convert("RGBA"), shade)
    d = ImageDraw.Draw(out)
    d.text((img.width // 2, img.height // 2), message, font=_font(24),
           fill="white", anchor="mm")
    return out.convert("RGB")


def slice_tiles(img: Image.Image, rows: int, cols: int,
                tile_size: tuple[int, int] = (96, 96)) -> list[Image.Image]:
    """Scale a frame onto a rows x cols key grid and cut it into key images.

    Tiles come back row-major, matching Stream Deck key numbering.
    """
    tw, th = tile_size
    board = img.resize((cols * tw, rows * th), Image.LANCZOS)
    tiles = []
    for r in range(rows):
        for c in range(cols):
            tiles.append(board.crop((c * tw, r * th, (c + 1) * tw, (r + 1) * th)))
    return tiles
