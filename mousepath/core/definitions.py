"""
MOUSEPATH DEFINITIONS
=====================
Central constants for the pipe-maze grid.

This file is the SINGLE SOURCE OF TRUTH for:
- Cell symbols (tunnels, crossings, endpoints)
- Symbol sets used by the sanity checker and the search
- Cardinal movement deltas and their default order

Import from here instead of duplicating constants across modules.

"""

from typing import Dict, Set, Tuple

# ==========================================
# SYMBOL PALETTE
# ==========================================

BLANK = ' '            # No structure
H_TUNNEL = '-'         # Horizontal tunnel
V_TUNNEL = '|'         # Vertical tunnel
CROSS = '+'            # 4-way crossing
ENDPOINT = 'X'         # Start/end marker (exactly two per grid)
VISITED_START = 'x'    # Internal: search origin, never visible to callers

SYMBOL_PALETTE: Dict[str, str] = {
    'BLANK': BLANK,
    'H_TUNNEL': H_TUNNEL,
    'V_TUNNEL': V_TUNNEL,
    'CROSS': CROSS,
    'ENDPOINT': ENDPOINT,
    'VISITED_START': VISITED_START,
}

# Reverse lookup for debugging
SYMBOL_TO_NAME: Dict[str, str] = {v: k for k, v in SYMBOL_PALETTE.items()}

# ==========================================
# SYMBOL CATEGORIES
# ==========================================

# Non-blank characters a caller may draw
LEGAL_SYMBOLS: Set[str] = {H_TUNNEL, V_TUNNEL, CROSS, ENDPOINT}

# ==========================================
# MOVEMENT
# ==========================================

DOWN: Tuple[int, int] = (1, 0)
UP: Tuple[int, int] = (-1, 0)
RIGHT: Tuple[int, int] = (0, 1)
LEFT: Tuple[int, int] = (0, -1)

# Default expansion order
CARDINAL_DELTAS: Tuple[Tuple[int, int], ...] = (DOWN, UP, RIGHT, LEFT)

# A vertical step cannot land on a horizontal tunnel and vice versa
PERPENDICULAR_TUNNEL: Dict[Tuple[int, int], str] = {
    DOWN: H_TUNNEL,
    UP: H_TUNNEL,
    RIGHT: V_TUNNEL,
    LEFT: V_TUNNEL,
}

# Maximum tunnel-aligned exits a single cell may have
MAX_EXITS: int = 2
