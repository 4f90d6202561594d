"""
Unit tests for the piece catalog.
"""
import numpy as np
import pytest

from block_blast.game import PIECE_LIST, PIECES, PieceId, get_piece, pick_random


def test_catalog_covers_every_id():
    assert len(PIECE_LIST) == len(PieceId) == 32
    assert set(PIECES) == set(PieceId)


def test_shapes_are_well_formed():
    for piece in PIECE_LIST:
        assert piece.shape.ndim == 2
        assert 1 <= piece.height <= 5 and 1 <= piece.width <= 5
        assert piece.block_count == int(np.count_nonzero(piece.shape)) > 0
        assert set(np.unique(piece.shape)) <= {0, 1}
        assert len(piece.cells()) == piece.block_count


def test_shapes_are_read_only():
    shape = get_piece(PieceId.O2).shape
    with pytest.raises(ValueError):
        shape[0, 0] = 0


def test_get_piece_accepts_string_ids():
    assert get_piece("PLUS5") is PIECES[PieceId.PLUS5]
    assert get_piece("R2x3").block_count == 6
    with pytest.raises(ValueError):
        get_piece("HEXOMINO")


def test_plus_cells():
    assert get_piece(PieceId.PLUS5).cells() == [(0, 1), (1, 0), (1, 1), (1, 2), (2, 1)]


def test_pick_random_maps_unit_interval_onto_catalog():
    assert pick_random(lambda: 0.0) == PIECE_LIST[0].id
    assert pick_random(lambda: 0.999999) == PIECE_LIST[-1].id
    assert pick_random(lambda: 0.5) == PIECE_LIST[len(PIECE_LIST) // 2].id


def test_pick_random_is_independent_per_call():
    # Same value every time gives the same piece every time: no bag.
    draws = {pick_random(lambda: 0.1) for _ in range(20)}
    assert len(draws) == 1
