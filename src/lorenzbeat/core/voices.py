from __future__ import annotations

from typing import Iterable, Optional, Sequence

from lorenzbeat.core.constants import FALLBACK_VOICE


def pick_voice(
    candidates: Sequence[str],
    available: Optional[Iterable[str]],
    fallback: str = FALLBACK_VOICE,
) -> str:
    """Return the first candidate the engine provides, else `fallback`."""
    provided = set(available or ())
    for name in candidates:
        if name in provided:
            return name
    return fallback


def pick_voices(
    roles: dict[str, Sequence[str]],
    available: Optional[Iterable[str]],
    fallback: str = FALLBACK_VOICE,
) -> dict[str, str]:
    """Resolve one voice per role (e.g. lead, pad) against the same voice list."""
    provided = tuple(available or ())
    return {role: pick_voice(cands, provided, fallback) for role, cands in roles.items()}
