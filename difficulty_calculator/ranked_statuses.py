# we use the ranked status from the osu!api
class BeatmapRankedStatus:
    GRAVEYARD = -2
    WIP = -1
    PENDING = 0
    RANKED = 1
    APPROVED = 2
    QUALIFIED = 3
    LOVED = 4


def is_ranked(ranked_status: int | None) -> bool:
    # qualified & loved maps are leaderboard-enabled, so they count as well
    if ranked_status is None:
        return False

    return ranked_status > BeatmapRankedStatus.PENDING
