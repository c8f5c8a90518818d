from __future__ import annotations

from typing import Optional, Tuple


def parse_locale(locale: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    "en_US" -> ("en", "US"); "pt-BR.UTF-8" -> ("pt", "BR"); "fr" -> ("fr", None).
    An empty locale falls back to English with no region.
    """
    if not locale:
        return "en", None
    tag = locale.split(".", 1)[0].split("@", 1)[0].replace("-", "_")
    parts = [p for p in tag.split("_") if p]
    if not parts:
        return "en", None
    language = parts[0].lower()
    region = parts[-1].upper() if len(parts) > 1 else None
    return language, region
