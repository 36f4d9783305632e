"""Shared datastructure helpers for hnsres."""
