"""Lark grammar for game-configuration files.

A configuration file describes one game as nested bracketed blocks:

    GAME Skirmish [
        CONFIG [ max_rounds :: 24  round_time :: 100s ]
        AGENTS [
            AGENT Blaze [
                @role :: duelist
                STATS [ health :: 100 ]
                ABILITIES [
                    ABILITY Flashpoint [
                        @aoe
                        cooldown :: 30s
                        CAST => ignite -> ENEMY (radius :: 5) => mark -> ENEMY
                    ]
                ]
            ]
        ]
    ]

Properties are written `key :: value`; behaviour pipelines chain
`action -> target` steps with `=>`.
"""

from lark import Lark

GAME_GRAMMAR = r"""
    start: "GAME" NAME "[" section* "]"

    ?section: config_section
            | agents_section
            | weapons_section
            | map_section
            | economy_section
            | effects_section
            | match_section

    config_section: "CONFIG" "[" property* "]"
    economy_section: "ECONOMY" "[" property* "]"
    match_section: "MATCH" "[" property* "]"

    agents_section: "AGENTS" "[" agent* "]"
    agent: "AGENT" NAME "[" agent_item* "]"
    ?agent_item: tagged_decorator
               | stats
               | abilities
    stats: "STATS" "[" property* "]"
    abilities: "ABILITIES" "[" ability* "]"
    ability: "ABILITY" NAME "[" behaviour_item* "]"

    weapons_section: "WEAPONS" "[" weapon* "]"
    weapon: "WEAPON" NAME "[" weapon_item* "]"
    ?weapon_item: tagged_decorator
                | property
                | nested_property

    map_section: "MAP" NAME "[" map_item* "]"
    ?map_item: teams
             | sites
             | callouts
    teams: "TEAMS" "[" team* "]"
    team: "TEAM" NAME "[" property* "]"
    sites: "SITES" "[" site* "]"
    site: "SITE" NAME "[" property* "]"
    callouts: "CALLOUTS" "::" value_list

    effects_section: "STATUS_EFFECTS" "[" effect* "]"
    effect: "EFFECT" NAME "[" behaviour_item* "]"

    ?behaviour_item: decorator
                   | trigger
                   | property

    decorator: "@" NAME
    tagged_decorator: "@" NAME "::" atom
    trigger: NAME "=>" pipeline
    pipeline: step ("=>" step)*
    step: NAME "->" NAME arguments? modifiers?
    arguments: "(" (argument ("," argument)*)? ")"
    argument: NAME "::" value
    modifiers: "WITH" "[" property* "]"

    property: NAME "::" value
    nested_property: NAME "[" property* "]"

    ?value: NUMBER -> number
          | DURATION -> duration
          | PERCENTAGE -> percentage
          | ESCAPED_STRING -> string
          | "YES" -> yes
          | "TRUE" -> yes
          | "true" -> yes
          | "NO" -> no
          | "FALSE" -> no
          | "false" -> no
          | NAME -> word
          | value_list
    value_list: "[" (value ("," value)*)? "]"
    atom: NAME | NUMBER | ESCAPED_STRING

    DURATION.2: /-?\d+(\.\d+)?s(?![A-Za-z0-9_])/
    PERCENTAGE.2: /-?\d+(\.\d+)?%/
    NUMBER: /-?\d+(\.\d+)?/

    COMMENT: /\/\/[^\n]*/ | /#[^\n]*/

    %import common.CNAME -> NAME
    %import common.ESCAPED_STRING
    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


GAME_PARSER = Lark(
    GAME_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
)
