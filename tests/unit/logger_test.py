from difficulty_calculator import logger


def test_should_add_current_beatmap_id_to_log_events():
    # arrange
    logger.set_beatmap_id(4321)

    # act
    event_dict = logger.add_beatmap_id(None, "info", {"event": "Processed beatmap"})

    # assert
    assert event_dict == {"event": "Processed beatmap", "beatmap_id": 4321}
    logger.set_beatmap_id(None)


def test_should_not_override_explicit_beatmap_id():
    # arrange
    logger.set_beatmap_id(4321)

    # act
    event_dict = logger.add_beatmap_id(None, "info", {"event": "x", "beatmap_id": 1})

    # assert
    assert event_dict["beatmap_id"] == 1
    logger.set_beatmap_id(None)


def test_should_not_add_beatmap_id_outside_of_processing():
    logger.set_beatmap_id(None)

    assert logger.add_beatmap_id(None, "info", {"event": "x"}) == {"event": "x"}


def test_should_rename_event_key_for_json_logs():
    assert logger.rename_event_key(None, "info", {"event": "x"}) == {"message": "x"}


def test_should_track_current_beatmap_id():
    logger.set_beatmap_id(75)
    assert logger.get_beatmap_id() == 75

    logger.set_beatmap_id(None)
    assert logger.get_beatmap_id() is None


def test_should_restore_previous_beatmap_id_on_reset():
    outer_token = logger.set_beatmap_id(10)
    inner_token = logger.set_beatmap_id(20)

    logger.reset_beatmap_id(inner_token)
    assert logger.get_beatmap_id() == 10

    logger.reset_beatmap_id(outer_token)
    assert logger.get_beatmap_id() is None
