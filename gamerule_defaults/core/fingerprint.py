import hashlib
from typing import Iterable


def compute_fingerprint(rule_names: Iterable[str]) -> str:
    """
    SHA-256 hex digest over the set of rule names.

    Names are de-duplicated and sorted first so the fingerprint only changes
    when the set of rules changes, never because the host enumerated them in
    a different order. A separator keeps ["ab", "c"] and ["a", "bc"] apart.
    """
    canonical = "\n".join(sorted(set(rule_names)))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
