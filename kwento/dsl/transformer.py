"""Turns the Lark parse tree of a GAME file into `kwento.dsl.nodes`.

Item rules inside a block (properties, decorators, triggers, ...) return
small tagged tuples; the enclosing block sorts them into the fields of its
node. Section rules return the section nodes themselves.
"""

from __future__ import annotations

import ast as py_ast
from typing import Any, Dict, List, Tuple

from lark import Transformer

from .errors import ConfigError
from .nodes import (
    Ability, Agent, AgentsSection, ConfigSection, EconomySection, GameNode,
    MapSection, MatchSection, Site, StatusEffect, StatusEffectsSection, Step,
    Team, Weapon, WeaponsSection,
)

ABILITY_TRIGGERS = ('CAST', 'ON_KILL', 'ON_APPLY', 'ON_TICK', 'ON_EXPIRE')
EFFECT_TRIGGERS = ('ON_APPLY', 'ON_TICK', 'ON_EXPIRE')

Item = Tuple[Any, ...]


def parse_number(text: str):
    return float(text) if '.' in text else int(text)


def properties_of(items: List[Item]) -> Dict[str, Any]:
    return {item[1]: item[2] for item in items if item[0] == 'property'}


def decorators_of(items: List[Item]) -> List[str]:
    return [item[1] for item in items if item[0] == 'decorator']


class ConfigTransformer(Transformer):

    def start(self, items):
        name = str(items[0])
        return GameNode(name=name, sections=list(items[1:]))

    # Sections

    def config_section(self, items):
        return ConfigSection(properties_of(items))

    def economy_section(self, items):
        return EconomySection(properties_of(items))

    def match_section(self, items):
        return MatchSection(properties_of(items))

    def agents_section(self, items):
        return AgentsSection(list(items))

    def weapons_section(self, items):
        return WeaponsSection(list(items))

    def effects_section(self, items):
        return StatusEffectsSection(list(items))

    def map_section(self, items):
        section = MapSection(name=str(items[0]))
        for item in items[1:]:
            kind = item[0]
            if kind == 'teams':
                section.teams.extend(item[1])
            elif kind == 'sites':
                section.sites.extend(item[1])
            elif kind == 'callouts':
                section.callouts.extend(item[1])
        return section

    # Blocks

    def agent(self, items):
        agent = Agent(name=str(items[0]))
        for item in items[1:]:
            if item[0] == 'decorator':
                agent.decorators.append(item[1])
            elif item[0] == 'stats':
                agent.stats.update(item[1])
            elif item[0] == 'abilities':
                agent.abilities.extend(item[1])
        return agent

    def stats(self, items):
        return ('stats', properties_of(items))

    def abilities(self, items):
        return ('abilities', list(items))

    def ability(self, items):
        name_token, body = items[0], items[1:]
        ability = Ability(
            name=str(name_token),
            decorators=decorators_of(body),
            properties=properties_of(body),
        )
        for item in body:
            if item[0] != 'trigger':
                continue
            _, trigger, steps, line = item
            if trigger not in ABILITY_TRIGGERS:
                raise ConfigError(f"unknown ability trigger {trigger!r}", line)
            if trigger == 'CAST':
                ability.cast = steps
            else:
                ability.events[trigger] = steps
        return ability

    def weapon(self, items):
        body = items[1:]
        return Weapon(name=str(items[0]), decorators=decorators_of(body), properties=properties_of(body))

    def effect(self, items):
        name_token, body = items[0], items[1:]
        effect = StatusEffect(
            name=str(name_token),
            decorators=decorators_of(body),
            properties=properties_of(body),
        )
        for item in body:
            if item[0] != 'trigger':
                continue
            _, trigger, steps, line = item
            if trigger not in EFFECT_TRIGGERS:
                raise ConfigError(f"unknown status effect trigger {trigger!r}", line)
            effect.events[trigger] = steps
        return effect

    def teams(self, items):
        return ('teams', list(items))

    def team(self, items):
        return Team(name=str(items[0]), properties=properties_of(items[1:]))

    def sites(self, items):
        return ('sites', list(items))

    def site(self, items):
        return Site(name=str(items[0]), properties=properties_of(items[1:]))

    def callouts(self, items):
        return ('callouts', [v if isinstance(v, str) else str(v) for v in items[0]])

    # Items

    def decorator(self, items):
        return ('decorator', str(items[0]))

    def tagged_decorator(self, items):
        return ('decorator', f"{items[0]}={items[1]}")

    def atom(self, items):
        token = items[0]
        if token.type == 'ESCAPED_STRING':
            return py_ast.literal_eval(token)
        return str(token)

    def trigger(self, items):
        name_token, steps = items
        return ('trigger', str(name_token), steps, name_token.line)

    def pipeline(self, items):
        return list(items)

    def step(self, items):
        action, target = str(items[0]), str(items[1])
        parameters: Dict[str, Any] = {}
        # both `(k :: v, ...)` arguments and `WITH [ ... ]` land in parameters
        for extra in items[2:]:
            parameters.update(extra)
        return Step(action=action, target=target, parameters=parameters)

    def arguments(self, items):
        return dict(items)

    def argument(self, items):
        return (str(items[0]), items[1])

    def modifiers(self, items):
        return properties_of(items)

    def property(self, items):
        return ('property', str(items[0]), items[1])

    def nested_property(self, items):
        return ('property', str(items[0]), properties_of(items[1:]))

    # Values

    def number(self, items):
        return parse_number(str(items[0]))

    def duration(self, items):
        return {"value": parse_number(str(items[0])[:-1]), "unit": "seconds"}

    def percentage(self, items):
        return {"value": parse_number(str(items[0])[:-1]), "unit": "percent"}

    def string(self, items):
        return py_ast.literal_eval(items[0])

    def yes(self, items):
        return True

    def no(self, items):
        return False

    def word(self, items):
        return str(items[0])

    def value_list(self, items):
        return list(items)
