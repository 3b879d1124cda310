import itertools
from dataclasses import dataclass
from typing import Iterable
from typing import Sequence


class Mods:
    NOMOD = 0
    NOFAIL = 1 << 0
    EASY = 1 << 1
    TOUCHSCREEN = 1 << 2  # old: 'NOVIDEO'
    HIDDEN = 1 << 3
    HARDROCK = 1 << 4
    SUDDENDEATH = 1 << 5
    DOUBLETIME = 1 << 6
    RELAX = 1 << 7
    HALFTIME = 1 << 8
    NIGHTCORE = 1 << 9
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUNOUT = 1 << 12
    AUTOPILOT = 1 << 13
    PERFECT = 1 << 14
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADEIN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET = 1 << 23
    KEY9 = 1 << 24
    KEYCOOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCOREV2 = 1 << 29
    MIRROR = 1 << 30


# mods which only exist in lazer have no legacy bit,
# and are dropped when converting to the legacy encoding
LEGACY_MODS_BY_ACRONYM: dict[str, int] = {
    "NF": Mods.NOFAIL,
    "EZ": Mods.EASY,
    "TD": Mods.TOUCHSCREEN,
    "HD": Mods.HIDDEN,
    "HR": Mods.HARDROCK,
    "SD": Mods.SUDDENDEATH,
    "DT": Mods.DOUBLETIME,
    "RX": Mods.RELAX,
    "HT": Mods.HALFTIME,
    "NC": Mods.NIGHTCORE | Mods.DOUBLETIME,
    "FL": Mods.FLASHLIGHT,
    "AT": Mods.AUTOPLAY,
    "SO": Mods.SPUNOUT,
    "AP": Mods.AUTOPILOT,
    "PF": Mods.PERFECT | Mods.SUDDENDEATH,
    "4K": Mods.KEY4,
    "5K": Mods.KEY5,
    "6K": Mods.KEY6,
    "7K": Mods.KEY7,
    "8K": Mods.KEY8,
    "FI": Mods.FADEIN,
    "RD": Mods.RANDOM,
    "CN": Mods.CINEMA,
    "TP": Mods.TARGET,
    "9K": Mods.KEY9,
    "CO": Mods.KEYCOOP,
    "1K": Mods.KEY1,
    "3K": Mods.KEY3,
    "2K": Mods.KEY2,
    "SV2": Mods.SCOREV2,
    "MR": Mods.MIRROR,
}


@dataclass(frozen=True)
class Mod:
    acronym: str


def to_legacy(mods: Iterable[Mod]) -> int:
    legacy_mods = Mods.NOMOD
    for mod in mods:
        legacy_mods |= LEGACY_MODS_BY_ACRONYM.get(mod.acronym, Mods.NOMOD)

    return legacy_mods


def legacy_combinations(
    exclusive_groups: Sequence[Sequence[str]],
) -> list[tuple[Mod, ...]]:
    """\
    Enumerate every combination of difficulty adjustment mods,
    picking at most one mod from each group of mutually exclusive mods.

    The first combination is always nomod.
    """
    options = [(None, *group) for group in exclusive_groups]

    combinations: list[tuple[Mod, ...]] = []
    for choice in itertools.product(*options):
        combinations.append(
            tuple(Mod(acronym) for acronym in choice if acronym is not None)
        )

    return combinations
