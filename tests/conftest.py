import itertools

from block_blast.game import PIECE_INDEX, PIECE_LIST


def rng_for(*piece_ids):
    """Random source that draws the given pieces in order, cycling."""
    values = [(PIECE_INDEX[p] + 0.5) / len(PIECE_LIST) for p in piece_ids]
    it = itertools.cycle(values)
    return lambda: next(it)
