"""
Tests for the RosterService: players, teams and roster entries.
"""

from datetime import date, timedelta

import pytest

from league_registry.errors import (
    InvalidRosterEntry,
    PlayerNotFound,
    RecordInUse,
    RosterConflict,
    RosterEntryNotFound,
    TeamNotFound,
)
from league_registry.services.roster_service import RosterService, _ranges_overlap
from league_registry.models.team import RosterEntry
from league_registry.schemas.roster import (
    PlayerCreate,
    RosterEntryCreate,
    RosterEntryUpdate,
    TeamCreate,
)

TODAY = date.today()


class TestPlayers:

    def test_get_unknown_player(self, db_session):
        with pytest.raises(PlayerNotFound):
            RosterService(db_session).get_player(999)

    def test_list_orders_by_last_name(self, db_session, make_player):
        make_player(first_name="Zoe", last_name="Brown")
        make_player(first_name="Amy", last_name="Adams")

        players, total = RosterService(db_session).list_players()
        assert total == 2
        assert [p.last_name for p in players] == ["Adams", "Brown"]

    def test_search_is_case_insensitive(self, db_session, make_player):
        make_player(first_name="Jordan", last_name="Lee", email="jlee@example.com")
        make_player(first_name="Casey", last_name="Park")

        players, total = RosterService(db_session).list_players(search="JLEE")
        assert total == 1
        assert players[0].first_name == "Jordan"

    def test_pagination(self, db_session, make_player):
        for i in range(5):
            make_player(last_name=f"Player{i}")

        players, total = RosterService(db_session).list_players(page=2, limit=2)
        assert total == 5
        assert [p.last_name for p in players] == ["Player2", "Player3"]


class TestAddToRoster:

    def test_add_player(self, db_session, make_team, make_player):
        team = make_team()
        player = make_player()

        entry = RosterService(db_session).add_to_roster(
            team.id,
            RosterEntryCreate(
                player_id=player.id, start_date=TODAY,
                jersey_number=9, position="Forward",
            ),
            today=TODAY,
        )

        assert entry.team_id == team.id
        assert entry.end_date is None
        assert entry.is_active_on(TODAY)

    def test_unknown_team(self, db_session, make_player):
        player = make_player()
        with pytest.raises(TeamNotFound):
            RosterService(db_session).add_to_roster(
                999, RosterEntryCreate(player_id=player.id, start_date=TODAY)
            )

    def test_start_date_in_past_rejected(self, db_session, make_team, make_player):
        team = make_team()
        player = make_player()
        with pytest.raises(InvalidRosterEntry, match="past"):
            RosterService(db_session).add_to_roster(
                team.id,
                RosterEntryCreate(
                    player_id=player.id, start_date=TODAY - timedelta(days=1)
                ),
                today=TODAY,
            )

    def test_blank_position_rejected(self, db_session, make_team, make_player):
        team = make_team()
        player = make_player()
        with pytest.raises(InvalidRosterEntry):
            RosterService(db_session).add_to_roster(
                team.id,
                RosterEntryCreate(player_id=player.id, start_date=TODAY, position="  "),
                today=TODAY,
            )

    def test_jersey_number_taken(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        team = make_team()
        make_roster_entry(team, make_player(first_name="Ana"), jersey_number=9)
        newcomer = make_player(first_name="Ben")

        with pytest.raises(RosterConflict, match="Jersey number 9"):
            RosterService(db_session).add_to_roster(
                team.id,
                RosterEntryCreate(
                    player_id=newcomer.id, start_date=TODAY, jersey_number=9
                ),
                today=TODAY,
            )

    def test_jersey_number_of_departed_player_is_free(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        team = make_team()
        make_roster_entry(
            team, make_player(first_name="Ana"),
            end_date=TODAY - timedelta(days=1), jersey_number=9,
        )
        newcomer = make_player(first_name="Ben")

        entry = RosterService(db_session).add_to_roster(
            team.id,
            RosterEntryCreate(player_id=newcomer.id, start_date=TODAY, jersey_number=9),
            today=TODAY,
        )
        assert entry.jersey_number == 9

    def test_overlapping_assignment_rejected(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        team = make_team()
        player = make_player()
        make_roster_entry(team, player)

        with pytest.raises(RosterConflict):
            RosterService(db_session).add_to_roster(
                team.id,
                RosterEntryCreate(
                    player_id=player.id, start_date=TODAY + timedelta(days=10)
                ),
                today=TODAY,
            )


class TestRangesOverlap:

    def test_open_ended_ranges_overlap(self):
        assert _ranges_overlap(TODAY, None, TODAY + timedelta(days=5), None)

    def test_disjoint_ranges(self):
        assert not _ranges_overlap(
            TODAY, TODAY + timedelta(days=1), TODAY + timedelta(days=2), None
        )

    def test_touching_ranges_overlap(self):
        """Both ends are inclusive, so sharing a day is an overlap."""
        assert _ranges_overlap(
            TODAY, TODAY + timedelta(days=2), TODAY + timedelta(days=2), None
        )


class TestRoster:

    def test_roster_ordered_by_jersey_with_blanks_last(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        team = make_team()
        make_roster_entry(team, make_player(first_name="NoNumber"))
        make_roster_entry(team, make_player(first_name="Ten"), jersey_number=10)
        make_roster_entry(team, make_player(first_name="Two"), jersey_number=2)

        _, entries = RosterService(db_session).get_roster(team.id, TODAY)
        assert [e.jersey_number for e in entries] == [2, 10, None]

    def test_roster_excludes_departed(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        team = make_team()
        make_roster_entry(team, make_player(first_name="Current"))
        make_roster_entry(
            team, make_player(first_name="Gone"), end_date=TODAY - timedelta(days=1)
        )

        _, entries = RosterService(db_session).get_roster(team.id, TODAY)
        assert len(entries) == 1

    def test_update_end_date_before_start_rejected(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        entry = make_roster_entry(make_team(), make_player(), start_date=TODAY)
        with pytest.raises(InvalidRosterEntry):
            RosterService(db_session).update_roster_entry(
                entry.id,
                RosterEntryUpdate(end_date=TODAY - timedelta(days=1)),
                today=TODAY,
            )

    def test_update_jersey_conflict(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        team = make_team()
        make_roster_entry(team, make_player(first_name="Ana"), jersey_number=7)
        entry = make_roster_entry(team, make_player(first_name="Ben"), jersey_number=8)

        with pytest.raises(RosterConflict):
            RosterService(db_session).update_roster_entry(
                entry.id, RosterEntryUpdate(jersey_number=7), today=TODAY
            )

    def test_update_keeps_unset_fields(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        entry = make_roster_entry(
            make_team(), make_player(), jersey_number=8, position="Goalkeeper"
        )
        updated = RosterService(db_session).update_roster_entry(
            entry.id, RosterEntryUpdate(jersey_number=1), today=TODAY
        )
        assert updated.jersey_number == 1
        assert updated.position == "Goalkeeper"

    def test_remove_entry(self, db_session, make_team, make_player, make_roster_entry):
        entry_id = make_roster_entry(make_team(), make_player()).id
        service = RosterService(db_session)

        service.remove_roster_entry(entry_id)
        db_session.commit()

        with pytest.raises(RosterEntryNotFound):
            service.remove_roster_entry(entry_id)


class TestPlayerMaintenance:

    def test_update_replaces_details(self, db_session, make_player):
        player = make_player(phone="555-0100")

        updated = RosterService(db_session).update_player(player.id, PlayerCreate(
            first_name="Alexis", last_name="Morgan", organization="Southside FC",
        ))
        db_session.commit()

        assert updated.first_name == "Alexis"
        assert updated.organization == "Southside FC"
        # PUT semantics: fields left out are cleared
        assert updated.phone is None

    def test_update_unknown_player(self, db_session):
        with pytest.raises(PlayerNotFound):
            RosterService(db_session).update_player(999, PlayerCreate(
                first_name="A", last_name="B", organization="C",
            ))

    def test_delete_player(self, db_session, make_player):
        player_id = make_player().id
        service = RosterService(db_session)

        service.delete_player(player_id)
        db_session.commit()

        with pytest.raises(PlayerNotFound):
            service.get_player(player_id)

    def test_active_roster_assignment_blocks_delete(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        player = make_player()
        entry = make_roster_entry(make_team(), player)

        with pytest.raises(RecordInUse) as exc:
            RosterService(db_session).delete_player(player.id)
        assert exc.value.details["roster_entry_ids"] == [entry.id]

    def test_assignment_ending_today_still_blocks_delete(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        player = make_player()
        make_roster_entry(make_team(), player, end_date=TODAY)

        with pytest.raises(RecordInUse):
            RosterService(db_session).delete_player(player.id, today=TODAY)

    def test_ended_assignments_are_removed_with_player(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        player = make_player()
        make_roster_entry(make_team(), player, end_date=TODAY - timedelta(days=1))

        RosterService(db_session).delete_player(player.id)
        db_session.commit()

        assert db_session.query(RosterEntry).count() == 0

    def test_registered_player_cannot_be_deleted(
        self, db_session, make_player, make_program, make_registration
    ):
        player = make_player()
        registration = make_registration(player, make_program())

        with pytest.raises(RecordInUse) as exc:
            RosterService(db_session).delete_player(player.id)
        assert exc.value.details["registration_ids"] == [registration.id]


class TestTeamMaintenance:

    def test_update_team(self, db_session, make_team):
        team = make_team()

        updated = RosterService(db_session).update_team(team.id, TeamCreate(
            name="Red Hawks", organization="Northside FC", division="U12",
        ))

        assert updated.name == "Red Hawks"
        assert updated.division == "U12"

    def test_update_unknown_team(self, db_session):
        with pytest.raises(TeamNotFound):
            RosterService(db_session).update_team(999, TeamCreate(
                name="X", organization="Y",
            ))

    def test_delete_empty_team(self, db_session, make_team):
        team_id = make_team().id
        service = RosterService(db_session)

        service.delete_team(team_id)
        db_session.commit()

        with pytest.raises(TeamNotFound):
            service.get_team(team_id)

    def test_team_with_roster_history_cannot_be_deleted(
        self, db_session, make_team, make_player, make_roster_entry
    ):
        team = make_team()
        make_roster_entry(team, make_player(), end_date=TODAY - timedelta(days=1))

        with pytest.raises(RecordInUse):
            RosterService(db_session).delete_team(team.id)
