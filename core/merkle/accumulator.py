"""
Module 02 - Merkle Accumulator
Append-only accumulator of transaction ids with inclusion proofs.

Owner: Protocol/Crypto Engineer
Module ID: M02

The accumulator keeps the full ordered leaf list and recomputes the root from
scratch on every append. Leaves are never removed.

Thread Safety:
- One lock guards leaves, root, height and leaf_count together.
- add_leaf is atomic with respect to every reader: a reader never sees a root
  that belongs to a different leaf count.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.merkle.merkle_tree import (
    EMPTY_TREE_ROOT,
    build_merkle_proof,
    build_merkle_root,
    compute_tree_height,
    hash_leaf,
    verify_merkle_proof,
)


logger = logging.getLogger(__name__)


class MerkleTree(BaseModel):
    """
    Serializable snapshot of an accumulator.

    Attributes:
        root: Root hash (EMPTY_TREE_ROOT when there are no leaves)
        height: Number of reductions from leaves to root
        leaf_count: Number of leaves
        leaves: Leaf hashes in insertion order
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(default=EMPTY_TREE_ROOT)
    height: int = Field(default=0, ge=0)
    leaf_count: int = Field(default=0, ge=0)
    leaves: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_consistency(self) -> "MerkleTree":
        if self.leaf_count != len(self.leaves):
            raise ValueError(
                f"leaf_count {self.leaf_count} does not match {len(self.leaves)} leaves"
            )
        if self.root != build_merkle_root(self.leaves):
            raise ValueError("root does not match leaves")
        if self.height != compute_tree_height(self.leaf_count):
            raise ValueError("height does not match leaf_count")
        return self


class MerkleAccumulator:
    """
    Append-only Merkle accumulator.

    Example:
        >>> acc = MerkleAccumulator()
        >>> acc.add_leaf("L0")
        >>> acc.add_leaf("L1")
        >>> acc.verify_proof("L1", acc.generate_proof(1), 1)
        True
    """

    def __init__(self) -> None:
        self._leaves: list[str] = []
        self._root: str = EMPTY_TREE_ROOT
        self._height: int = 0
        self._leaf_count: int = 0
        self._lock = threading.RLock()

    @classmethod
    def from_leaf_data(cls, items: Iterable[str]) -> "MerkleAccumulator":
        """Rebuild an accumulator by appending each item in order."""
        accumulator = cls()
        accumulator.add_leaves(items)
        return accumulator

    @classmethod
    def from_snapshot(cls, tree: MerkleTree) -> "MerkleAccumulator":
        """Restore an accumulator from a validated snapshot of leaf hashes."""
        accumulator = cls()
        with accumulator._lock:
            accumulator._leaves = list(tree.leaves)
            accumulator._leaf_count = tree.leaf_count
            accumulator._root = tree.root
            accumulator._height = tree.height
        return accumulator

    @property
    def root(self) -> str:
        with self._lock:
            return self._root

    @property
    def height(self) -> int:
        with self._lock:
            return self._height

    @property
    def leaf_count(self) -> int:
        with self._lock:
            return self._leaf_count

    @property
    def leaves(self) -> list[str]:
        """Copy of the leaf hashes."""
        with self._lock:
            return list(self._leaves)

    def __len__(self) -> int:
        return self.leaf_count

    def add_leaf(self, data: str) -> None:
        """
        Append a leaf and recompute the root from the whole leaf set.

        Args:
            data: Leaf data; stored as hash_leaf(data)
        """
        leaf_hash = hash_leaf(data)
        with self._lock:
            self._leaves.append(leaf_hash)
            self._leaf_count += 1
            self._root = build_merkle_root(self._leaves)
            self._height = compute_tree_height(self._leaf_count)
            count, root = self._leaf_count, self._root

        logger.debug("Appended leaf %d, root=%s", count - 1, root[:16])

    def add_leaves(self, items: Iterable[str]) -> None:
        """Append several leaves, one add_leaf per item."""
        for item in items:
            self.add_leaf(item)

    def generate_proof(self, leaf_index: int) -> list[str]:
        """
        Generate an inclusion proof for the leaf at leaf_index.

        Raises:
            MerkleTreeException: If leaf_index >= leaf_count
        """
        with self._lock:
            leaves = list(self._leaves)
        return build_merkle_proof(leaves, leaf_index)

    def verify_proof(self, leaf_data: str, proof: Sequence[str], leaf_index: int) -> bool:
        """
        Verify an inclusion proof against the current root.

        Returns False (never raises) for proofs that do not fit the tree.
        """
        with self._lock:
            root, leaf_count = self._root, self._leaf_count
        return verify_merkle_proof(leaf_data, proof, leaf_index, root, leaf_count)

    def snapshot(self) -> MerkleTree:
        """Return a consistent, serializable copy of the current state."""
        with self._lock:
            return MerkleTree(
                root=self._root,
                height=self._height,
                leaf_count=self._leaf_count,
                leaves=list(self._leaves),
            )

    def __repr__(self) -> str:
        return f"MerkleAccumulator(leaf_count={self.leaf_count}, root={self.root[:16]}...)"


__all__ = [
    "MerkleTree",
    "MerkleAccumulator",
]
