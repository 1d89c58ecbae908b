"""Default configuration values."""

DEFAULT_TARGET = "out.png"  # output image path
DEFAULT_BLOCK_SIZE = 32  # pixels per module edge for the flat style
SPRITE_BLOCK_SIZE = 32  # native frame size of the bundled sprite sheets
SPRITE_FRAMES = 4  # frames per sheet strip
DEFAULT_SHEET = "sheet.png"  # sprite sheet looked up relative to the cwd
DEFAULT_ERROR = "q"  # QR error correction level (quartile)
DEFAULT_QUIET_ZONE = 4  # modules of light border added before decoding
COLOR_DARK = (0, 0, 0, 255)  # BGRA
COLOR_LIGHT = (255, 255, 255, 255)  # BGRA
FINDER_MODULES = 7
ALIGNMENT_MODULES = 5
MAX_VERSION = 40
