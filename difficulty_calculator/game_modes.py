class GameMode:
    OSU = 0
    TAIKO = 1
    CATCH = 2
    MANIA = 3


# beatmaps of this mode can be converted into every other ruleset
CONVERT_ELIGIBLE_MODE = GameMode.OSU


def is_convert_eligible(game_mode: int) -> bool:
    return game_mode == CONVERT_ELIGIBLE_MODE
