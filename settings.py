"""
settings.py — Global constants for Hexa.

All magic numbers live here. No other module should hardcode colors,
dimensions, timing values, or storage keys. Import what you need with:
    from settings import COLOR, SCREEN_W, ...
"""

# ── Screen ────────────────────────────────────────────────────────────────────
SCREEN_W = 360
SCREEN_H = 640
FPS = 60
TITLE = "Hexa"

# ── Colors ────────────────────────────────────────────────────────────────────
COLOR = {
    "background":  (250, 250, 250),   # #FAFAFA
    "tile":        (255, 255, 255),   # #FFFFFF
    "tile_border": (204, 204, 204),   # #CCCCCC
    "outline":     ( 51,  51,  51),   # #333333 — pattern indicator stroke
    "highlight":   ( 41, 171, 226),   # #29ABE2 — active pattern hex
    "chrome":      (117, 117, 117),   # #757575
    "text":        ( 33,  33,  33),   # #212121
    "text_light":  (255, 255, 255),
    "pass":        ( 52, 168,  83),   # selected (correct) outline
    "fail":        (234,  67,  53),   # shake tint on a wrong pick
    "disabled":    (189, 189, 189),
}

# ── Palette & themes ──────────────────────────────────────────────────────────
# Palette entries are color identifiers; the active theme maps each one to a hex
# string in the same order.
PALETTE = ("orange", "green", "blue", "purple")

THEMES = (
    ("#F7931E", "#8CC63F", "#29ABE2", "#7B8CDE"),   # 0 — default
    ("#F5A623", "#7ED4D1", "#EC8C99", "#8FD47E"),   # 1
    ("#6B9370", "#B5D4A1", "#A8CEE2", "#D4C89E"),   # 2
    ("#2D3436", "#4A5F8C", "#B8C5E0", "#F4E63D"),   # 3
)
DEFAULT_THEME = 0

# ── Board ─────────────────────────────────────────────────────────────────────
BOARD_SIZE = 7        # centre cell + six neighbours
HEX_RADIUS = 44       # px, centre to corner
HEX_GAP = 6           # px between neighbouring cells
INDICATOR_RADIUS = 12 # px, pattern indicator hexes

# ── Session ───────────────────────────────────────────────────────────────────
INITIAL_TIME_S = 18
TICK_INTERVAL_S = 1.0
MATCH_SCORE = 10
MATCH_BONUS_S = 2
MISS_PENALTY_S = 2
TIME_POWER_UP_S = 10
REGENERATE_DELAY_S = 0.2   # correct-match highlight before the next pattern
SHAKE_DURATION_S = 0.3

# Keys match core.session.PowerUp values.
INITIAL_POWER_UPS = {
    "time": 5,
    "skip": 5,
    "thaw": 0,
}

# ── Persistence ───────────────────────────────────────────────────────────────
DATA_DIR_ENV = "HEXA_DATA_DIR"
DATA_DIR_DEFAULT = "~/.hexa"
STORE_FILENAME = "hexa.json"
STATS_KEY = "hexaStats"
THEME_KEY = "hexaTheme"
BEST_TIME_PLACEHOLDER = "--:--"

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL_ENV = "HEXA_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ── UI Layout (relative to 360×640) ──────────────────────────────────────────
HEADER_H = 80          # px — time / score bar
INDICATOR_H = 70       # px — pattern indicator strip under the header
POWER_UP_BTN_H = 56    # px
POWER_UP_BTN_GAP = 10  # px
MENU_BTN_W = 200
MENU_BTN_H = 48

# ── Fonts ─────────────────────────────────────────────────────────────────────
FONT_FAMILY = "couriernew"
FONT_SIZE_XL = 28
FONT_SIZE_LG = 18
FONT_SIZE_MD = 14
FONT_SIZE_SM = 11
