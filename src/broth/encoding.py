"""Conversions for binary cell states.

Optional helpers; the core engine never imports this module.

Bit order: when states are packed into an octet, logical position 0 is the
most significant bit (bit 7) and position 7 the least significant (bit 0).
``[ALIVE, DEAD, DEAD, DEAD, DEAD, DEAD, DEAD, DEAD]`` packs to ``0b10000000``.
"""

from typing import Iterable, List, Sequence

import numpy as np

from .core.cellstate import CellState


def to_bool(state: CellState) -> bool:
    """True for ALIVE, False for DEAD."""
    return state == CellState.ALIVE


def from_bool(flag: bool) -> CellState:
    """ALIVE for a truthy value, DEAD otherwise."""
    return CellState.ALIVE if flag else CellState.DEAD


def pack_octet(states: Sequence[CellState]) -> int:
    """Pack exactly eight binary states into an integer 0..255.

    Raises:
        ValueError: If not given exactly eight states
    """
    if len(states) != 8:
        raise ValueError(f"An octet holds exactly 8 states, got {len(states)}")

    octet = 0
    for state in states:
        octet = (octet << 1) | (1 if state == CellState.ALIVE else 0)
    return octet


def unpack_octet(octet: int) -> List[CellState]:
    """Unpack an integer 0..255 into eight binary states.

    Raises:
        ValueError: If the value does not fit in an octet
    """
    if not 0 <= octet <= 255:
        raise ValueError(f"Octet must be in 0..255, got {octet}")
    return [from_bool((octet >> (7 - position)) & 1) for position in range(8)]


def pack_states(states: Iterable[CellState]) -> bytes:
    """Pack any number of binary states into bytes.

    The final octet is padded with zero (DEAD) bits.
    """
    bits = np.fromiter((state == CellState.ALIVE for state in states), dtype=bool)
    return np.packbits(bits, bitorder="big").tobytes()


def unpack_states(data: bytes, count: int) -> List[CellState]:
    """Unpack the first ``count`` states from packed bytes.

    Raises:
        ValueError: If data holds fewer than ``count`` states
    """
    if count < 0 or count > len(data) * 8:
        raise ValueError(f"Cannot unpack {count} states from {len(data)} bytes")

    bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8), count=count, bitorder="big")
    return [from_bool(bit) for bit in bits]
