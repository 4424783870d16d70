"""Tests for plotsheet/draft.py state machine."""
import math

import pytest

from plotsheet.draft import DraftFix, DraftIncompleteError


def filled_draft():
    draft = DraftFix()
    draft.edit_distance("20")
    draft.edit_azimuth("340")
    draft.edit_assumed_latitude("35N")
    draft.edit_assumed_longitude("145 18 W")
    return draft


def test_new_draft_is_unset():
    draft = DraftFix()
    assert all(field.status == "unset" for field in draft.fields.values())
    assert not draft.can_add


def test_complete_draft_can_add():
    draft = filled_draft()
    assert draft.complete
    assert draft.can_add


def test_canonical_text_written_back():
    draft = DraftFix()
    assert draft.edit_distance("20").text == "20.0’"
    assert draft.edit_azimuth("45").text == "045°"
    assert draft.edit_assumed_latitude("+35").text == "35° N"
    assert draft.edit_assumed_longitude("145 18 W").text == "145° 18.0’ W"
    assert draft.edit_assumed_longitude("145W").text == "145° 00.0’ W"


def test_commit_builds_fix_line():
    fix = filled_draft().commit()
    assert fix.distance == 20
    assert fix.azimuth == pytest.approx(math.radians(340))
    assert fix.assumed_position.latitude == 35
    assert fix.assumed_position.longitude == pytest.approx(-145.3)


def test_commit_disarms_but_keeps_values():
    draft = filled_draft()
    draft.commit()
    assert not draft.can_add
    assert draft.complete
    assert draft.fields["assumed_longitude"].text == "145° 18.0’ W"

    draft.edit_azimuth("240")
    assert draft.can_add
    assert draft.commit().assumed_position.longitude == pytest.approx(-145.3)


def test_invalid_field_blocks_add():
    draft = filled_draft()
    update = draft.edit_azimuth("400")
    assert not update.ok
    assert update.text == "400"
    assert update.error
    assert draft.fields["azimuth"].status == "invalid"
    assert draft.fields["azimuth"].value is None
    assert not draft.can_add


def test_invalid_field_leaves_others_alone():
    draft = filled_draft()
    draft.edit_assumed_latitude("95N")
    assert draft.fields["distance"].value == 20
    assert draft.fields["assumed_longitude"].is_valid


def test_correcting_field_reenables_add():
    draft = filled_draft()
    draft.edit_assumed_latitude("north")
    draft.edit_assumed_latitude("34 N")
    assert draft.can_add
    assert draft.fields["assumed_latitude"].value == 34


def test_empty_distance_and_azimuth_are_zero():
    draft = DraftFix()
    assert draft.edit_distance("").text == ""
    assert draft.edit_azimuth(" ").text == ""
    assert draft.fields["distance"].value == 0
    assert draft.fields["azimuth"].value == 0


def test_empty_assumed_position_is_equator_and_meridian():
    draft = DraftFix()
    assert draft.edit_assumed_latitude("").text == "00° N"
    assert draft.fields["assumed_latitude"].value == 0


def test_missing_assumed_position_blocks_add():
    draft = DraftFix()
    draft.edit_distance("20")
    draft.edit_azimuth("340")
    draft.edit_assumed_latitude("35N")
    assert not draft.can_add


def test_away_distance_is_negative():
    draft = filled_draft()
    draft.set_direction("A")
    assert draft.fields["distance"].value == -20
    assert draft.commit().distance == -20


def test_direction_toggle_rereads_distance():
    draft = DraftFix()
    draft.edit_distance("12.5")
    update = draft.set_direction("A")
    assert update.text == "12.5’"
    assert draft.fields["distance"].value == -12.5
    draft.set_direction("T")
    assert draft.fields["distance"].value == 12.5


def test_bad_direction_raises():
    with pytest.raises(ValueError, match="Direction"):
        DraftFix().set_direction("X")


def test_commit_incomplete_raises():
    draft = DraftFix()
    draft.edit_distance("abc")
    with pytest.raises(DraftIncompleteError, match="distance"):
        draft.commit()


def test_commit_twice_raises():
    draft = filled_draft()
    draft.commit()
    with pytest.raises(DraftIncompleteError):
        draft.commit()
