"""Block Blast: an 8x8 block placement puzzle engine."""

from block_blast.game import BlockBlastGame, GameConfig, GameSnapshot, ScoringRules

__all__ = ["BlockBlastGame", "GameConfig", "GameSnapshot", "ScoringRules"]
