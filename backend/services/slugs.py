"""SEO-friendly hero slugs: "Anti-Mage" (id 1) <-> "anti-mage-1"."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def hero_slug(name: str, hero_id: int) -> str:
    slug_name = _NON_ALNUM.sub("-", name.lower()).strip("-")
    return f"{slug_name}-{hero_id}"


def hero_id_from_slug(slug: str) -> int:
    """Hero id from "anti-mage-1" or a bare "1". Returns 0 when there is none."""
    if slug.isdigit():
        return int(slug)
    last = slug.rsplit("-", 1)[-1]
    return int(last) if last.isdigit() else 0
