"""Role-scoped snapshots of a session.

Every connection gets a ``PlayerView``. Spymasters get a ``SpymasterView``,
which is the same snapshot plus the full key card. Callers never decide
visibility themselves; they serialize whatever ``project_view`` returns.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from .session import SPYMASTER, GameSession


@dataclass
class PlayerView:
    code: str
    host_id: Optional[str]
    status: str
    settings: dict
    words: List[str]
    revealed: List[bool]
    revealed_cards: List[Optional[str]]
    teams: List[str]
    current_team_index: int
    current_clue: Optional[dict]
    guesses_remaining: Optional[int]
    guesses_this_turn: int
    players: List[dict]
    scores: Dict[str, dict]
    eliminated_teams: List[str]
    winner: Optional[str]

    kind = 'player'

    def to_dict(self):
        return {
            'view': self.kind,
            'code': self.code,
            'host_id': self.host_id,
            'status': self.status,
            'settings': self.settings,
            'words': self.words,
            'revealed': self.revealed,
            'revealed_cards': self.revealed_cards,
            'teams': self.teams,
            'current_team_index': self.current_team_index,
            'current_clue': self.current_clue,
            'guesses_remaining': self.guesses_remaining,
            'guesses_this_turn': self.guesses_this_turn,
            'players': self.players,
            'scores': self.scores,
            'eliminated_teams': self.eliminated_teams,
            'winner': self.winner,
        }


@dataclass
class SpymasterView(PlayerView):
    key_card: List[str] = None

    kind = 'spymaster'

    def to_dict(self):
        payload = super().to_dict()
        payload['key_card'] = self.key_card
        return payload


def _base_fields(session: GameSession) -> dict:
    # Copy everything mutable so later engine calls cannot reach into a view
    return dict(
        code=session.code,
        host_id=session.host_id,
        status=session.status,
        settings=session.settings.to_dict(),
        words=list(session.words),
        revealed=list(session.revealed),
        revealed_cards=[
            card if shown else None
            for card, shown in zip(session.key_card, session.revealed)
        ],
        teams=list(session.teams),
        current_team_index=session.current_team_index,
        current_clue=session.current_clue.to_dict() if session.current_clue else None,
        guesses_remaining=session.guesses_remaining,
        guesses_this_turn=session.guesses_this_turn,
        players=[p.to_dict() for p in session.players],
        scores={team: score.to_dict() for team, score in session.scores.items()},
        eliminated_teams=list(session.eliminated_teams),
        winner=session.winner,
    )


def project_view(session: GameSession, player_id=None) -> PlayerView:
    player = session.find_player(player_id) if player_id is not None else None
    if player is not None and player.role == SPYMASTER:
        return SpymasterView(key_card=list(session.key_card), **_base_fields(session))
    return PlayerView(**_base_fields(session))
