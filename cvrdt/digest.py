"""
Canonical ordering and fingerprints for CRDT snapshots.

Set-backed CRDTs have no stable iteration order, so snapshots sort their
members by a JSON rendering before they are compared or hashed.
"""

import hashlib
import json


def canonical_key(item):
    return json.dumps(item, sort_keys=True, default=repr)


def canonical(items):
    """Return items as a list in a deterministic order."""
    return sorted(items, key=canonical_key)


def fingerprint(payload):
    """SHA-256 hex digest of a snapshot dict."""
    raw = json.dumps(payload, sort_keys=True, default=repr)
    return hashlib.sha256(raw.encode()).hexdigest()
