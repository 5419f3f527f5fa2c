"""
Module 02 - Merkle Accumulator
Append-only Merkle tree over transaction ids, with inclusion proofs.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- MerkleAccumulator: lock-guarded append-only accumulator
- MerkleTree: serializable snapshot (root, height, leaf_count, leaves)
- build_merkle_root: Compute root from leaf hashes
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a proof against a root

Commitment Rules:
1. Leaf hashing: sha256(b"leaf:" + data)
2. Parent hashing: sha256(b"node:" + left_hex + right_hex)
3. Promotion: an unpaired last node moves up unchanged
4. Empty tree: EMPTY_TREE_ROOT ("0" * 68)
5. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleAccumulator

    acc = MerkleAccumulator()
    for tx_id in tx_ids:
        acc.add_leaf(tx_id)

    proof = acc.generate_proof(2)
    assert acc.verify_proof(tx_ids[2], proof, 2)
"""
from .merkle_tree import (
    EMPTY_TREE_ROOT,
    LEAF_TAG,
    NODE_TAG,
    hash_leaf,
    hash_pair,
    hash_level,
    build_merkle_root,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    compute_tree_height,
)

from .accumulator import (
    MerkleAccumulator,
    MerkleTree,
)


__all__ = [
    # Core types
    "MerkleAccumulator",
    "MerkleTree",
    "EMPTY_TREE_ROOT",
    "LEAF_TAG",
    "NODE_TAG",
    # Core functions
    "hash_leaf",
    "hash_pair",
    "hash_level",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_height",
]
