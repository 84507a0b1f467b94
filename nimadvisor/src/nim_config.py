"""
Game configuration and constants.
"""

# Board layout
ROW_CAPACITIES = (3, 5, 7)
MAX_TAKE = 3  # pieces a player may remove per turn

# Players
PLAYERS = ["A", "B"]

# Save file symbols
FULL_SLOT = "F"
EMPTY_SLOT = "E"
SLOT_SEPARATOR = ","
LINE_TERMINATOR = "."

# Terminal colors
RESET = "\033[0m"
ROW_LABEL = "\033[1;38;2;0;255;0m"
FULL_PIECE = "\033[97m"     # bright white
EMPTY_PIECE = "\033[90m"    # dark gray
PLAYER_COLOR = "\033[96m"   # cyan
PIECE_GLYPH = "■"
LABEL_WIDTH = 10

# Evaluation
EVAL_GAMES = 500
