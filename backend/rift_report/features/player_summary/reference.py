"""Curated item and summoner-spell tables consulted by membership tests."""

from typing import FrozenSet

# Summoner spell id that marks the jungler
SMITE_SPELL_ID = 11

# Support starter items (Spellthief, Relic Shield, Steel Shoulders, Spectral Sickle lines)
SUPPORT_ITEM_IDS: FrozenSet[int] = frozenset(
    {
        3850, 3851, 3853, 3854,
        3858, 3859, 3860, 3862,
        3869, 3870, 3871, 3874,
    }
)

# Build-defining first completions whose purchase time is tracked.
# Pre-14.10 mythics stay listed so historical matches still resolve.
MYTHIC_ITEM_IDS: FrozenSet[int] = frozenset(
    {
        6630,  # Goredrinker
        6631,  # Stridebreaker
        6632,  # Divine Sunderer
        6671,  # Galeforce
        6672,  # Kraken Slayer
        6673,  # Immortal Shieldbow
        6653,  # Liandry's
        6655,  # Luden's
        6656,  # Night Harvester
        6662,  # Frostfire
        6664,  # Turbo Chemtank
        6675,  # Navori
        6677,  # Rageknife
        3190,  # Locket
        2065,  # Shurelya's
        6692,  # Eclipse
        6691,  # Duskblade
        6693,  # Prowler's
        3078,  # Trinity Force
        3026,  # Guardian Angel
        6657,  # Rod of Ages
        3089,  # Rabadon's
        3124,  # Guinsoo's
        3153,  # Blade of the Ruined King
        3053,  # Sterak's
        3115,  # Nashor's
        4628,  # Horizon Focus
    }
)

# Total creep score below which an unlabeled participant is assumed to be support
SUPPORT_CS_THRESHOLD = 120

# Minimum games on a champion before it can be a power pick
POWER_PICK_MIN_GAMES = 3
POWER_PICK_LIMIT = 3
