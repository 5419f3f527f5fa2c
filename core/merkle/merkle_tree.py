"""
Module 02 - Merkle Tree Implementation
Merkle root computation, proof generation, and verification over hex leaves.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Leaf and parent hashing with domain tags
- Root computation by whole-layer pairwise reduction
- Inclusion proof generation for any leaf index
- Inclusion proof verification
- Tree height for a given leaf count

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(b"leaf:" + data.encode("utf-8")).hex()
2. Parent hashing: parent = sha256(b"node:" + left_hex + right_hex).hex()
   (the children are hashed as their hex text, not raw bytes)
3. Promotion rule: an unpaired last node moves up unchanged; it is
   never paired with a copy of itself
4. Empty leaves: build_merkle_root([]) returns EMPTY_TREE_ROOT
5. Single leaf: root = leaf

Proof Layout:
- A proof is the list of sibling hashes, bottom-up.
- A layer where the node is promoted contributes no sibling, so a proof can
  be shorter than the tree height. Verification walks the same layer sizes
  (derived from the leaf count) to know which layers were skipped.
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import hash_hex
from core.schemas.errors import MerkleTreeException


LEAF_TAG = b"leaf:"
NODE_TAG = b"node:"

# Root of a tree with no leaves. Fixed sentinel, not a hash.
EMPTY_TREE_ROOT: str = "0" * 68


def hash_leaf(data: str) -> str:
    """
    Hash leaf data into a leaf hash.

    Args:
        data: Opaque leaf data (typically a transaction id)

    Returns:
        64-character hex leaf hash
    """
    return hash_hex(LEAF_TAG, data)


def hash_pair(left: str, right: str) -> str:
    """
    Compute the parent hash of two child nodes.

    Order matters: hash_pair(a, b) != hash_pair(b, a).
    """
    return hash_hex(NODE_TAG, left, right)


def hash_level(level: Sequence[str]) -> list[str]:
    """
    Reduce one layer of the tree to the next.

    Adjacent pairs at even offsets are hashed together; a trailing unpaired
    node is promoted unchanged.

    Example: [a, b, c] -> [hash_pair(a, b), c]
    """
    next_level: list[str] = []
    for i in range(0, len(level), 2):
        if i + 1 < len(level):
            next_level.append(hash_pair(level[i], level[i + 1]))
        else:
            next_level.append(level[i])
    return next_level


def build_merkle_root(leaves: Sequence[str]) -> str:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Algorithm:
    1. If empty: return EMPTY_TREE_ROOT
    2. Otherwise reduce layer by layer with hash_level until one node remains

    Args:
        leaves: Leaf hashes in insertion order. Order is preserved.

    Returns:
        Root hash
    """
    if len(leaves) == 0:
        return EMPTY_TREE_ROOT

    current_level: list[str] = list(leaves)
    while len(current_level) > 1:
        current_level = hash_level(current_level)

    return current_level[0]


def compute_tree_height(leaf_count: int) -> int:
    """
    Compute the height of a tree with the given number of leaves.

    Height is the number of reductions from the leaf layer to the root,
    i.e. ceil(log2(leaf_count)), and 0 for empty or single-leaf trees.

    >>> [compute_tree_height(n) for n in (0, 1, 2, 3, 4, 5, 8)]
    [0, 0, 1, 2, 2, 3, 3]
    """
    height = 0
    nodes = leaf_count
    while nodes > 1:
        nodes = (nodes + 1) // 2
        height += 1
    return height


def _sibling_index(index: int) -> int:
    return index + 1 if index % 2 == 0 else index - 1


def build_merkle_proof(leaves: Sequence[str], leaf_index: int) -> list[str]:
    """
    Generate an inclusion proof for the leaf at the given index.

    Algorithm:
    1. Start at the leaf layer with current_index = leaf_index
    2. At each layer:
       - Sibling is current_index + 1 if even, else current_index - 1
       - Record the sibling hash if it exists in this layer
       - Move up: current_index //= 2, layer = hash_level(layer)
    3. Stop when the layer has a single node

    Args:
        leaves: Leaf hashes
        leaf_index: 0-based index of the leaf to prove

    Returns:
        Sibling hashes, bottom-up

    Raises:
        MerkleTreeException: If leaf_index is out of bounds
    """
    if leaf_index < 0 or leaf_index >= len(leaves):
        raise MerkleTreeException(
            "Leaf index out of bounds",
            leaf_index=leaf_index,
            details={"leaf_count": len(leaves)},
        )

    proof: list[str] = []
    current_index = leaf_index
    current_level: list[str] = list(leaves)

    while len(current_level) > 1:
        sibling_index = _sibling_index(current_index)
        if sibling_index < len(current_level):
            proof.append(current_level[sibling_index])

        current_index //= 2
        current_level = hash_level(current_level)

    return proof


def compute_root_from_proof(
    leaf_hash: str,
    proof: Sequence[str],
    leaf_index: int,
    leaf_count: int,
) -> str | None:
    """
    Fold a proof back up to a root.

    Layer sizes are derived from leaf_count. A layer in which the node has no
    sibling (promotion) consumes no proof element. At every other layer the
    running hash is the left child when current_index is even and the right
    child when it is odd.

    Returns:
        The recomputed root, or None if the proof does not fit the tree shape
        (wrong index, too few or too many siblings).
    """
    if leaf_index < 0 or leaf_index >= leaf_count:
        return None

    current_hash = leaf_hash
    current_index = leaf_index
    layer_size = leaf_count
    remaining = iter(proof)
    consumed = 0

    while layer_size > 1:
        if _sibling_index(current_index) < layer_size:
            sibling = next(remaining, None)
            if not isinstance(sibling, str):
                return None
            consumed += 1
            if current_index % 2 == 0:
                current_hash = hash_pair(current_hash, sibling)
            else:
                current_hash = hash_pair(sibling, current_hash)

        current_index //= 2
        layer_size = (layer_size + 1) // 2

    if consumed != len(proof):
        return None
    return current_hash


def verify_merkle_proof(
    leaf_data: str,
    proof: Sequence[str],
    leaf_index: int,
    root: str,
    leaf_count: int,
) -> bool:
    """
    Verify that leaf_data sits at leaf_index of a tree with the given root.

    Args:
        leaf_data: Raw leaf data (hashed with hash_leaf)
        proof: Sibling hashes, bottom-up, as produced by build_merkle_proof
        leaf_index: Claimed 0-based index of the leaf
        root: Expected root
        leaf_count: Number of leaves in the tree the root was computed from

    Returns:
        True if the proof is valid, False otherwise. Never raises for a
        malformed proof.
    """
    computed = compute_root_from_proof(hash_leaf(leaf_data), proof, leaf_index, leaf_count)
    return computed is not None and computed == root


__all__ = [
    "LEAF_TAG",
    "NODE_TAG",
    "EMPTY_TREE_ROOT",
    "hash_leaf",
    "hash_pair",
    "hash_level",
    "build_merkle_root",
    "compute_tree_height",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
]
