from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(slots=True)
class DeduplicationResult:
    unique_texts: List[str]
    groups: List[List[int]]  # Each group contains indexes pointing back to the source list


def deduplicate_texts(texts: List[str]) -> DeduplicationResult:
    """Group texts that are identical once surrounding whitespace is stripped."""
    unique: List[str] = []
    groups: List[List[int]] = []
    seen: Dict[str, int] = {}
    for idx, text in enumerate(texts):
        normalized = text.strip()
        match_index = seen.get(normalized)
        if match_index is None:
            seen[normalized] = len(unique)
            unique.append(normalized)
            groups.append([idx])
        else:
            groups[match_index].append(idx)
    return DeduplicationResult(unique_texts=unique, groups=groups)


def restore_padding(original: str, translated: str) -> str:
    """Re-apply the leading and trailing whitespace of ``original`` to ``translated``."""
    core = original.strip()
    if not core:
        return original
    start = original.find(core)
    return f"{original[:start]}{translated.strip()}{original[start + len(core):]}"
