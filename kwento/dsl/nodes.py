"""Syntax tree for game-configuration files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

Properties = Dict[str, Any]


@dataclass
class Step:
    """One `action -> target (...)` stage of a behaviour pipeline."""
    action: str
    target: str
    parameters: Properties = field(default_factory=dict)


Pipeline = List[Step]


@dataclass
class Ability:
    name: str
    decorators: List[str] = field(default_factory=list)
    properties: Properties = field(default_factory=dict)
    cast: Optional[Pipeline] = None
    events: Dict[str, Pipeline] = field(default_factory=dict)


@dataclass
class Agent:
    name: str
    decorators: List[str] = field(default_factory=list)
    stats: Properties = field(default_factory=dict)
    abilities: List[Ability] = field(default_factory=list)


@dataclass
class Weapon:
    name: str
    decorators: List[str] = field(default_factory=list)
    properties: Properties = field(default_factory=dict)


@dataclass
class Team:
    name: str
    properties: Properties = field(default_factory=dict)


@dataclass
class Site:
    name: str
    properties: Properties = field(default_factory=dict)


@dataclass
class StatusEffect:
    name: str
    decorators: List[str] = field(default_factory=list)
    properties: Properties = field(default_factory=dict)
    events: Dict[str, Pipeline] = field(default_factory=dict)


@dataclass
class Section:
    """Base class for the top-level blocks of a GAME file."""
    pass


@dataclass
class ConfigSection(Section):
    properties: Properties


@dataclass
class AgentsSection(Section):
    agents: List[Agent]


@dataclass
class WeaponsSection(Section):
    weapons: List[Weapon]


@dataclass
class MapSection(Section):
    name: str
    teams: List[Team] = field(default_factory=list)
    sites: List[Site] = field(default_factory=list)
    callouts: List[str] = field(default_factory=list)


@dataclass
class EconomySection(Section):
    properties: Properties


@dataclass
class StatusEffectsSection(Section):
    effects: List[StatusEffect]


@dataclass
class MatchSection(Section):
    properties: Properties


@dataclass
class GameNode:
    name: str
    sections: List[Section]
