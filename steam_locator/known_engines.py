"""
Apps known to ship on Valve's Source and Source 2 engines.

These answer engine queries without touching the disk. Keep the two tables
separate, catalogs opt into each one independently.
"""

SOURCE_APPS = frozenset({
    220,     # Half-Life 2
    240,     # Counter-Strike: Source
    280,     # Half-Life: Source
    300,     # Day of Defeat: Source
    320,     # Half-Life 2: Deathmatch
    340,     # Half-Life 2: Lost Coast
    360,     # Half-Life Deathmatch: Source
    380,     # Half-Life 2: Episode One
    400,     # Portal
    420,     # Half-Life 2: Episode Two
    440,     # Team Fortress 2
    500,     # Left 4 Dead
    550,     # Left 4 Dead 2
    620,     # Portal 2
    630,     # Alien Swarm
    1840,    # Source Filmmaker
    4000,    # Garry's Mod
    17500,   # Zombie Panic! Source
    17520,   # Synergy
    17580,   # Dystopia
    222880,  # Insurgency
    243730,  # Source SDK Base 2013 Singleplayer
    243750,  # Source SDK Base 2013 Multiplayer
    265630,  # Fistful of Frags
    317400,  # Portal Stories: Mel
    362890,  # Black Mesa
})

SOURCE2_APPS = frozenset({
    570,      # Dota 2
    730,      # Counter-Strike 2
    546560,   # Half-Life: Alyx
    583950,   # Artifact
    590830,   # s&box
    1046930,  # Dota Underlords
    1269260,  # Artifact Foundry
    1422450,  # Deadlock
})
