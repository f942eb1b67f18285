from datetime import date

from icebreaker.legality.clock import fixed_clock, is_past
from icebreaker.legality.rotation import (
    is_released,
    is_set_released,
    only_in_rotation,
    rotation_violations,
)
from icebreaker.models.card_set import CardSet
from icebreaker.models.format_result import ViolationCategory


class TestClock:
    def test_fixed_clock(self) -> None:
        assert fixed_clock(date(2019, 1, 1))() == date(2019, 1, 1)

    def test_is_past_strict(self) -> None:
        clock = fixed_clock(date(2019, 1, 1))
        assert is_past(date(2018, 12, 31), clock)
        assert not is_past(date(2019, 1, 1), clock)
        assert not is_past(None, clock)


class TestIsReleased:
    def test_released_set(self, make_card, card_sets, clock) -> None:
        assert is_released(card_sets, make_card(setname="Down the White Nile"), clock)

    def test_unreleased_set(self, make_card, card_sets, clock) -> None:
        assert not is_released(card_sets, make_card(setname="Council of the Crest"), clock)

    def test_rotated_set(self, make_card, card_sets, clock) -> None:
        assert not is_released(card_sets, make_card(setname="Creation and Control"), clock)

    def test_unknown_set_not_released(self, make_card, card_sets, clock) -> None:
        assert not is_released(card_sets, make_card(setname="Mystery Pack"), clock)

    def test_card_flag_does_not_decide(self, make_card, card_sets, clock) -> None:
        flagged = make_card(setname="Down the White Nile", rotated=True)
        assert is_released(card_sets, flagged, clock)
        unflagged = make_card(setname="Creation and Control", rotated=False)
        assert not is_released(card_sets, unflagged, clock)

    def test_release_day_is_not_yet_released(self, clock) -> None:
        card_set = CardSet("Launch Day", "Kitara", available=date(2019, 1, 1))
        assert not is_set_released(card_set, clock)


class TestOnlyInRotation:
    def test_core_deck_in_rotation(self, legal_corp_deck, card_sets, clock) -> None:
        assert only_in_rotation(card_sets, legal_corp_deck, clock)

    def test_rotated_card_reported(
        self, make_card, make_deck, corp_identity, card_sets, clock
    ) -> None:
        ash = make_card("Ash 2X3ZB9CY", setname="Creation and Control")
        deck = make_deck(corp_identity, (ash, 3))
        violations = rotation_violations(card_sets, deck, clock)
        assert [(v.category, v.example) for v in violations] == [
            (ViolationCategory.NOT_RELEASED, "Ash 2X3ZB9CY")
        ]
        assert not only_in_rotation(card_sets, deck, clock)

    def test_identity_checked(self, make_card, make_deck, card_sets, clock) -> None:
        draft = make_card(type="Identity", setname="Draft")
        assert not only_in_rotation(card_sets, make_deck(draft), clock)

    def test_missing_identity_not_in_rotation(self, make_deck, card_sets, clock) -> None:
        violations = rotation_violations(card_sets, make_deck(None), clock)
        assert violations[0].category == ViolationCategory.MISSING_IDENTITY

    def test_every_offender_reported(self, make_card, make_deck, card_sets, clock) -> None:
        ash = make_card("Ash 2X3ZB9CY", setname="Creation and Control")
        crest = make_card("Hunter Seeker", setname="Council of the Crest")
        violations = rotation_violations(card_sets, make_deck(None, (ash, 1), (crest, 1)), clock)
        assert [(v.category, v.example) for v in violations] == [
            (ViolationCategory.MISSING_IDENTITY, ""),
            (ViolationCategory.NOT_RELEASED, "Ash 2X3ZB9CY"),
            (ViolationCategory.NOT_RELEASED, "Hunter Seeker"),
        ]

    def test_later_clock_releases_pack(self, make_card, make_deck, corp_identity) -> None:
        sets = (
            CardSet("Revised Core Set", "Revised Core Set", True, date(2017, 6, 1)),
            CardSet("Sovereign Sight", "Kitara", False, date(2018, 8, 1)),
        )
        deck = make_deck(corp_identity, (make_card(setname="Sovereign Sight"), 3))
        assert not only_in_rotation(sets, deck, fixed_clock(date(2018, 8, 1)))
        assert only_in_rotation(sets, deck, fixed_clock(date(2018, 8, 2)))
