"""Hero ability and talent resolution from OpenDota constants.

Inputs are the ``/constants/hero_abilities`` mapping (npc hero name ->
ability and talent names) and the ``/constants/abilities`` detail table.
Talent display names carry ``{s:KEY}`` placeholders that refer to attribute
values, either on the talent itself or on one of the hero's abilities.
"""

import re
from dataclasses import asdict, dataclass, field
from typing import Any

PLACEHOLDER = re.compile(r"\{s:([^}]+)\}")
TALENT_MARKER = "special_bonus"
STRIPPED_PREFIX = "bonus_"
COOLDOWN_KEY = "abilitycooldown"
# Most cooldown-reduction talents are worth a few seconds; constants omit the value.
COOLDOWN_FALLBACK = "3"


@dataclass(frozen=True)
class Ability:
    name: str
    dname: str
    desc: str = ""
    behavior: str | list[str] | None = None
    dmg_type: str | None = None
    mc: str | list[str] | None = None
    cd: str | list[str] | None = None
    img: str | None = None
    is_innate: bool = False
    attrib: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Talent:
    name: str
    dname: str
    level: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class HeroAbilities:
    abilities: list[Ability] = field(default_factory=list)
    talents: list[Talent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "abilities": [a.to_dict() for a in self.abilities],
            "talents": [t.to_dict() for t in self.talents],
        }


def npc_name(hero_name: str) -> str:
    if hero_name.startswith("npc_dota_hero_"):
        return hero_name
    return f"npc_dota_hero_{hero_name}"


def _behaviors(detail: dict) -> list:
    behavior = detail.get("behavior")
    return behavior if isinstance(behavior, list) else [behavior]


def build_abilities(names: list[str], details: dict[str, dict]) -> list[Ability]:
    """Keep the hero's visible, non-talent abilities that have details."""
    abilities = []
    for name in names:
        detail = details.get(name)
        if not detail:
            continue
        if "Hidden" in _behaviors(detail):
            continue
        if TALENT_MARKER in name:
            continue
        if not detail.get("dname"):
            continue
        abilities.append(
            Ability(
                name=name,
                dname=detail["dname"],
                desc=detail.get("desc") or "",
                behavior=detail.get("behavior"),
                dmg_type=detail.get("dmg_type"),
                mc=detail.get("mc"),
                cd=detail.get("cd"),
                img=detail.get("img"),
                is_innate=bool(detail.get("is_innate", False)),
                attrib=list(detail.get("attrib") or []),
            )
        )
    return abilities


def _first(value: Any) -> str:
    if isinstance(value, list):
        return str(value[0]) if value else ""
    return str(value)


def _last(value: Any) -> str:
    if isinstance(value, list):
        return str(value[-1]) if value else ""
    return str(value)


def _lookup(key: str, talent_attrib: list[dict] | None, abilities: list[Ability]) -> str | None:
    if talent_attrib:
        for attr in talent_attrib:
            if attr.get("key") == key:
                return _first(attr.get("value"))

    search_key = key[len(STRIPPED_PREFIX):] if key.startswith(STRIPPED_PREFIX) else key
    lower_key = search_key.lower()

    # Ability attributes scale by level; the max level value is the one shown.
    for ability in abilities:
        for attr in ability.attrib:
            if attr.get("key") in (search_key, key):
                return _last(attr.get("value"))
    for ability in abilities:
        for attr in ability.attrib:
            if str(attr.get("key", "")).lower() == lower_key:
                return _last(attr.get("value"))

    if lower_key == COOLDOWN_KEY and any(a.cd for a in abilities):
        return COOLDOWN_FALLBACK
    return None


def resolve_placeholders(text: str, talent_attrib: list[dict] | None, abilities: list[Ability]) -> str:
    """Substitute ``{s:KEY}`` tokens. Unmatched tokens are left in place."""

    def _sub(match: re.Match) -> str:
        value = _lookup(match.group(1), talent_attrib, abilities)
        return match.group(0) if value is None else value

    return PLACEHOLDER.sub(_sub, text).replace("%%", "%")


def build_talents(
    talents: list[dict],
    details: dict[str, dict],
    abilities: list[Ability],
    header_fallback: bool = False,
) -> list[Talent]:
    resolved = []
    for talent in talents:
        name = talent["name"]
        detail = details.get(name) or {}
        attrib = detail.get("attrib") or []
        dname = detail.get("dname") or name.replace("special_bonus_", "").replace("_", " ")
        dname = resolve_placeholders(dname, attrib, abilities)

        if header_fallback and "{s:" in dname and attrib and attrib[0].get("header"):
            dname = attrib[0]["header"].replace(":", "").strip()

        resolved.append(Talent(name=name, dname=dname, level=int(talent.get("level") or 0)))
    return resolved


def resolve_hero_abilities(
    hero_name: str,
    hero_abilities: dict[str, dict],
    ability_details: dict[str, dict],
    header_fallback: bool = False,
) -> HeroAbilities:
    """Abilities and talents with display names for one hero (e.g. "antimage")."""
    entry = hero_abilities.get(npc_name(hero_name))
    if not entry:
        return HeroAbilities()

    abilities = build_abilities(entry.get("abilities") or [], ability_details)
    talents = build_talents(entry.get("talents") or [], ability_details, abilities, header_fallback)
    return HeroAbilities(abilities=abilities, talents=talents)
