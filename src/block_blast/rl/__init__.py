"""Agents driving the Block Blast environment."""
