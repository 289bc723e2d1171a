"""Tests for the tournament admin routes with a mocked backend."""

from __future__ import annotations

import unittest

from afriksoccer.api.errors import ApiError, SessionExpiredError
from afriksoccer.api.schemas import parse_tournament
from tests.helpers import (
    TOURNAMENT_ID,
    AppTestCase,
    make_persisted_match,
    make_player,
    make_tournament,
)

PROJECTION_KEY = f"bracket_projection:{TOURNAMENT_ID}"


class TournamentRoutesTestCase(AppTestCase):
    """Test case for the tournament blueprint."""

    def _serve(self, **overrides) -> None:
        self.backend.get_tournament.return_value = parse_tournament(
            make_tournament(**overrides)
        )

    def _persisted(self) -> list[dict]:
        return [
            make_persisted_match(
                "m1", 1, 1, players=[make_player(1), make_player(2)], nextMatchId="m3"
            ),
            make_persisted_match(
                "m2", 1, 2, players=[make_player(3), make_player(4)], nextMatchId="m3",
                date="2024-06-15", time="18:00", player1Score=2, player2Score=1,
            ),
            make_persisted_match("m3", 2, 1),
        ]

    def test_requires_login(self) -> None:
        """Anonymous users are sent to the login page."""
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}")
        self.assertEqual(response.status_code, 302)
        self.assertIn("/auth/login", response.headers["Location"])

    def test_requires_admin(self) -> None:
        """Non-admins are turned away."""
        self.login(is_admin=False)
        response = self.client.get(
            f"/admin/tournaments/{TOURNAMENT_ID}", follow_redirects=True
        )
        self.assertIn(b"You are not authorized to view this page.", response.data)
        self.backend.get_tournament.assert_not_called()

    def test_list_tournaments(self) -> None:
        """The index lists tournaments from the backend."""
        self.login()
        self.backend.list_tournaments.return_value = [parse_tournament(make_tournament())]
        response = self.client.get("/admin/tournaments/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Afrik Cup Spring", response.data)

    def test_list_tournaments_backend_failure(self) -> None:
        """A failed listing is flashed, not fatal."""
        self.login()
        self.backend.list_tournaments.side_effect = ApiError(500, "Server down")
        response = self.client.get("/admin/tournaments/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Server down", response.data)

    def test_view_overview(self) -> None:
        """The overview shows prizes, fill rate and the derived deadline."""
        self.login()
        self._serve()
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Afrik Cup Spring", response.data)
        self.assertIn(b"30000", response.data)
        self.assertIn(b"(50%)", response.data)
        self.assertIn(b"14 June 2024", response.data)

    def test_view_players_tab(self) -> None:
        """The players tab lists the roster."""
        self.login()
        self._serve()
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}?tab=players")
        self.assertIn(b"gamer3", response.data)

    def test_view_generated_bracket(self) -> None:
        """Without persisted matches a preview and the generate button are shown."""
        self.login()
        self._serve()
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}?tab=bracket")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Preview only", response.data)
        self.assertIn(b"Generate bracket", response.data)
        self.assertIn(b"Semi-finals", response.data)
        self.assertNotIn(b"Edit match", response.data)

    def test_generate_button_hidden_when_bracket_exists(self) -> None:
        """A persisted bracket cannot be generated again."""
        self.login()
        self._serve(matches=self._persisted())
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}?tab=bracket")
        self.assertNotIn(b"Generate bracket", response.data)
        self.assertNotIn(b"Preview only", response.data)
        self.assertIn(b"Edit match", response.data)
        self.assertIn(b"18:00 UTC", response.data)

    def test_generate_button_hidden_unless_in_progress(self) -> None:
        """Only running tournaments get a bracket."""
        self.login()
        self._serve(status="open")
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}?tab=bracket")
        self.assertNotIn(b"Generate bracket", response.data)

    def test_view_backend_failure(self) -> None:
        """A failed fetch renders the error page with the backend message."""
        self.login()
        self.backend.get_tournament.side_effect = ApiError(404, "Tournament not found")
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}")
        self.assertEqual(response.status_code, 404)
        self.assertIn(b"Tournament not found", response.data)

    def test_view_backend_server_error(self) -> None:
        """Other backend failures keep their status on the error page."""
        self.login()
        self.backend.get_tournament.side_effect = ApiError(500, "Server down")
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}")
        self.assertEqual(response.status_code, 500)
        self.assertIn(b"Server down", response.data)
        self.assertIn(b"Unable to load the tournament details.", response.data)

    def test_expired_session_logs_out(self) -> None:
        """A rejected token clears the session."""
        self.login()
        self.backend.get_tournament.side_effect = SessionExpiredError()
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}")
        self.assertEqual(response.status_code, 302)
        self.assertIn("/auth/login", response.headers["Location"])
        with self.client.session_transaction() as sess:
            self.assertNotIn("token", sess)

    def test_bracket_json(self) -> None:
        """The JSON view returns the matches on screen."""
        self.login()
        self._serve()
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}/bracket.json")
        data = response.get_json()
        self.assertEqual(data["source"], "generated")
        self.assertFalse(data["bracketExists"])
        self.assertEqual(len(data["matches"]), 3)

    def test_generate_bracket_success(self) -> None:
        """Generation flashes the backend message and drops local picks."""
        self.login()
        self._serve()
        with self.client.session_transaction() as sess:
            sess[PROJECTION_KEY] = [["round1-match1", "p1"]]
        self.backend.generate_bracket.return_value = "Bracket generated"

        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/bracket/generate", follow_redirects=True
        )

        self.assertIn(b"Bracket generated", response.data)
        self.backend.generate_bracket.assert_called_once_with(TOURNAMENT_ID)
        with self.client.session_transaction() as sess:
            self.assertNotIn(PROJECTION_KEY, sess)

    def test_generate_bracket_rejected(self) -> None:
        """A business-rule rejection is flashed verbatim."""
        self.login()
        self._serve()
        self.backend.generate_bracket.side_effect = ApiError(400, "Bracket already exists")
        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/bracket/generate", follow_redirects=True
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Bracket already exists", response.data)

    def test_set_winner_stores_pick(self) -> None:
        """A valid winner is kept in the session and advanced on screen."""
        self.login()
        self._serve()
        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/round1-match1/winner",
            data={"player_id": "p2"},
            follow_redirects=True,
        )
        self.assertIn(b"gamer2 was designated winner of match 1.", response.data)
        with self.client.session_transaction() as sess:
            self.assertEqual(sess[PROJECTION_KEY], [["round1-match1", "p2"]])

        data = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}/bracket.json").get_json()
        final = next(m for m in data["matches"] if m["_id"] == "round2-match1")
        self.assertEqual([p["_id"] for p in final["players"]], ["p2"])

    def _pick(self, match_id: str, player: str):
        return self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/{match_id}/winner",
            data={"player_id": player},
            follow_redirects=True,
        )

    def test_repeated_pick_keeps_final(self) -> None:
        """Picking a round-one winner again does not undo the final."""
        self.login()
        self._serve()
        self._pick("round1-match1", "p1")
        self._pick("round1-match2", "p3")
        self._pick("round2-match1", "p1")
        with self.client.session_transaction() as sess:
            picks = sess[PROJECTION_KEY]

        response = self._pick("round1-match1", "p1")

        self.assertIn(b"gamer1 was designated winner of match 1.", response.data)
        with self.client.session_transaction() as sess:
            self.assertEqual(sess[PROJECTION_KEY], picks)
        data = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}/bracket.json").get_json()
        final = next(m for m in data["matches"] if m["_id"] == "round2-match1")
        self.assertEqual(final["winner"]["_id"], "p1")
        self.assertEqual([p["_id"] for p in final["players"]], ["p1", "p3"])

    def test_correction_under_decided_final_is_rejected(self) -> None:
        """A round-one winner cannot change once the final is decided."""
        self.login()
        self._serve()
        self._pick("round1-match1", "p1")
        self._pick("round1-match2", "p3")
        self._pick("round2-match1", "p1")

        response = self._pick("round1-match1", "p2")

        self.assertIn(b"The next match already has a winner", response.data)
        with self.client.session_transaction() as sess:
            self.assertEqual(sess[PROJECTION_KEY][0], ["round1-match1", "p1"])

    def test_set_winner_rejects_outsider(self) -> None:
        """A player from another match cannot win this one."""
        self.login()
        self._serve()
        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/round1-match1/winner",
            data={"player_id": "p4"},
            follow_redirects=True,
        )
        self.assertIn(b"winner not a participant", response.data)
        with self.client.session_transaction() as sess:
            self.assertNotIn(PROJECTION_KEY, sess)

    def test_set_winner_requires_player(self) -> None:
        """The form needs a player id."""
        self.login()
        self._serve()
        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/round1-match1/winner",
            data={},
            follow_redirects=True,
        )
        self.assertIn(b"Select a winner.", response.data)

    def test_edit_match_prefills_form(self) -> None:
        """The edit form shows the stored schedule and scores."""
        self.login()
        self._serve(matches=self._persisted())
        response = self.client.get(f"/admin/tournaments/{TOURNAMENT_ID}/matches/m2/edit")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'value="2024-06-15"', response.data)
        self.assertIn(b'value="18:00"', response.data)

    def test_edit_match_submits_result(self) -> None:
        """A valid result is sent to the backend and local picks are dropped."""
        self.login()
        self._serve(matches=self._persisted())
        with self.client.session_transaction() as sess:
            sess[PROJECTION_KEY] = [["m1", "p1"]]

        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/m1/edit",
            data={
                "match_date": "2024-06-16",
                "match_time": "20:30",
                "player1_score": "3",
                "player2_score": "1",
            },
            follow_redirects=True,
        )

        self.assertIn(b"The match details were saved.", response.data)
        self.backend.submit_match_result.assert_called_once_with(
            "m1",
            {
                "date": "2024-06-16",
                "time": "20:30",
                "status": "pending",
                "player1Score": 3,
                "player2Score": 1,
            },
        )
        with self.client.session_transaction() as sess:
            self.assertNotIn(PROJECTION_KEY, sess)

    def test_edit_match_validation(self) -> None:
        """Missing dates and text scores never reach the backend."""
        self.login()
        self._serve(matches=self._persisted())
        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/m1/edit",
            data={"match_date": "", "player1_score": "abc"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"This field is required.", response.data)
        self.assertIn(b"Not a valid integer value.", response.data)
        self.backend.submit_match_result.assert_not_called()

    def test_edit_match_rejects_negative_score(self) -> None:
        """Scores cannot be negative."""
        self.login()
        self._serve(matches=self._persisted())
        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/m1/edit",
            data={"match_date": "2024-06-16", "player1_score": "-1"},
        )
        self.assertIn(b"Scores cannot be negative.", response.data)
        self.backend.submit_match_result.assert_not_called()

    def test_edit_match_backend_failure(self) -> None:
        """A rejected save is flashed and the form is shown again."""
        self.login()
        self._serve(matches=self._persisted())
        self.backend.submit_match_result.side_effect = ApiError(400, "Match already closed")
        response = self.client.post(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/m1/edit",
            data={"match_date": "2024-06-16"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Match already closed", response.data)

    def test_edit_unknown_match(self) -> None:
        """An unknown match sends the operator back to the bracket."""
        self.login()
        self._serve(matches=self._persisted())
        response = self.client.get(
            f"/admin/tournaments/{TOURNAMENT_ID}/matches/zz/edit", follow_redirects=True
        )
        self.assertIn(b"No match selected.", response.data)


if __name__ == "__main__":
    unittest.main()
