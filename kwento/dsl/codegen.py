"""Lowers a `GameNode` into the JSON-ready configuration dictionary."""

from __future__ import annotations

from typing import Any, Dict, List

from .nodes import (
    Ability, Agent, AgentsSection, ConfigSection, EconomySection, GameNode,
    MapSection, MatchSection, Section, Site, StatusEffect,
    StatusEffectsSection, Step, Team, Weapon, WeaponsSection,
)

# output order of the top-level sections, whatever order the file uses
SECTION_KEYS = (
    (ConfigSection, 'config'),
    (AgentsSection, 'agents'),
    (WeaponsSection, 'weapons'),
    (MapSection, 'map'),
    (EconomySection, 'economy'),
    (StatusEffectsSection, 'status_effects'),
    (MatchSection, 'match'),
)


def generate(game: GameNode) -> Dict[str, Any]:
    result: Dict[str, Any] = {"game_name": game.name}
    for section_type, key in SECTION_KEYS:
        for section in game.sections:
            if isinstance(section, section_type):
                result[key] = section_to_obj(section)
    return result


def section_to_obj(section: Section) -> Any:
    if isinstance(section, (ConfigSection, EconomySection, MatchSection)):
        return dict(section.properties)
    if isinstance(section, AgentsSection):
        return [agent_to_obj(a) for a in section.agents]
    if isinstance(section, WeaponsSection):
        return [weapon_to_obj(w) for w in section.weapons]
    if isinstance(section, MapSection):
        return {
            "name": section.name,
            "teams": [team_to_obj(t) for t in section.teams],
            "sites": [site_to_obj(s) for s in section.sites],
            "callouts": list(section.callouts),
        }
    if isinstance(section, StatusEffectsSection):
        return [effect_to_obj(e) for e in section.effects]
    raise TypeError(f"Unsupported section: {type(section).__name__}")


def agent_to_obj(agent: Agent) -> Dict[str, Any]:
    return {
        "name": agent.name,
        "decorators": list(agent.decorators),
        "stats": dict(agent.stats),
        "abilities": [ability_to_obj(a) for a in agent.abilities],
    }


def ability_to_obj(ability: Ability) -> Dict[str, Any]:
    obj: Dict[str, Any] = {
        "name": ability.name,
        "decorators": list(ability.decorators),
        "properties": dict(ability.properties),
    }
    if ability.cast is not None:
        obj["cast"] = pipeline_to_obj(ability.cast)
    if ability.events:
        obj["events"] = {name: pipeline_to_obj(p) for name, p in ability.events.items()}
    return obj


def weapon_to_obj(weapon: Weapon) -> Dict[str, Any]:
    return {
        "name": weapon.name,
        "decorators": list(weapon.decorators),
        "properties": dict(weapon.properties),
    }


def team_to_obj(team: Team) -> Dict[str, Any]:
    return {"name": team.name, "properties": dict(team.properties)}


def site_to_obj(site: Site) -> Dict[str, Any]:
    return {"name": site.name, "properties": dict(site.properties)}


def effect_to_obj(effect: StatusEffect) -> Dict[str, Any]:
    obj: Dict[str, Any] = {
        "name": effect.name,
        "decorators": list(effect.decorators),
        "properties": dict(effect.properties),
    }
    if effect.events:
        obj["events"] = {name: pipeline_to_obj(p) for name, p in effect.events.items()}
    return obj


def pipeline_to_obj(steps: List[Step]) -> List[Dict[str, Any]]:
    return [
        {"action": s.action, "target": s.target, "parameters": dict(s.parameters)}
        for s in steps
    ]
