"""In-memory model of one room's match.

A ``GameSession`` is plain data. It is mutated only by the functions in
``codewords.game.engine`` and round-trips through ``to_dict``/``from_dict``
for storage.
"""
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

BOARD_DIMENSIONS = {'small': 4, 'standard': 5, 'large': 6}
TEAM_ORDER = ['red', 'blue', 'green', 'yellow']
NEUTRAL = 'neutral'
ASSASSIN = 'assassin'

SPYMASTER = 'spymaster'
OPERATIVE = 'operative'
SPECTATOR = 'spectator'
ROLES = (SPYMASTER, OPERATIVE, SPECTATOR)

LOBBY = 'lobby'
PLAYING = 'playing'
FINISHED = 'finished'

MIN_TEAMS = 2
MAX_TEAMS = 4

ROOM_CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
ROOM_CODE_LENGTH = 6

_WORDS_PER_TEAM_DEFAULTS = {
    'small': {2: 6, 3: 4, 4: 3},
    'standard': {2: 8, 3: 6, 4: 5},
    'large': {2: 12, 3: 9, 4: 7},
}


def default_words_per_team(board_size: str, team_count: int) -> int:
    return _WORDS_PER_TEAM_DEFAULTS[board_size][team_count]


def default_assassin_count(board_size: str) -> int:
    return 2 if board_size == 'large' else 1


def generate_room_code(rng=None) -> str:
    """Generate a 6-character room code without ambiguous glyphs (0/O, 1/I)."""
    rng = rng or random
    return ''.join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))


@dataclass
class GameSettings:
    board_size: str = 'standard'
    team_count: int = 2
    words_per_team: int = 8
    assassin_count: int = 1
    language: str = 'en'
    # House rules; the defaults are the standard game
    extra_guess: bool = True
    first_team_bonus: bool = True

    @classmethod
    def defaults(cls, board_size='standard', team_count=2, language='en'):
        return cls(
            board_size=board_size,
            team_count=team_count,
            words_per_team=default_words_per_team(board_size, team_count),
            assassin_count=default_assassin_count(board_size),
            language=language,
        )

    @property
    def dimension(self) -> int:
        return BOARD_DIMENSIONS[self.board_size]

    @property
    def card_count(self) -> int:
        return self.dimension ** 2

    @property
    def active_teams(self) -> List[str]:
        return TEAM_ORDER[:self.team_count]

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        return cls(**data)


@dataclass
class Clue:
    word: str
    count: int

    def to_dict(self):
        return {'word': self.word, 'count': self.count}


@dataclass
class TeamScore:
    found: int = 0
    total: int = 0

    def to_dict(self):
        return {'found': self.found, 'total': self.total}


@dataclass
class Player:
    id: str
    name: str
    team: Optional[str] = None
    role: Optional[str] = None
    is_host: bool = False

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'team': self.team,
            'role': self.role,
            'is_host': self.is_host,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data['name'],
            team=data.get('team'),
            role=data.get('role'),
            is_host=bool(data.get('is_host')),
        )


@dataclass
class GameSession:
    code: str
    host_id: Optional[str]
    settings: GameSettings
    words: List[str]
    key_card: List[str]
    revealed: List[bool]
    teams: List[str]
    scores: Dict[str, TeamScore]
    status: str = LOBBY
    current_team_index: int = 0
    current_clue: Optional[Clue] = None
    # None means unbounded (a clue given with count 0)
    guesses_remaining: Optional[int] = 0
    guesses_this_turn: int = 0
    players: List[Player] = field(default_factory=list)
    eliminated_teams: List[str] = field(default_factory=list)
    winner: Optional[str] = None
    created_at: float = field(default_factory=time.time)

    @property
    def current_team(self) -> str:
        return self.teams[self.current_team_index]

    @property
    def active_teams(self) -> List[str]:
        return [t for t in self.teams if t not in self.eliminated_teams]

    def find_player(self, player_id) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def spymaster_for(self, team) -> Optional[Player]:
        for player in self.players:
            if player.team == team and player.role == SPYMASTER:
                return player
        return None

    def to_dict(self):
        return {
            'code': self.code,
            'host_id': self.host_id,
            'status': self.status,
            'settings': self.settings.to_dict(),
            'words': list(self.words),
            'key_card': list(self.key_card),
            'revealed': list(self.revealed),
            'teams': list(self.teams),
            'current_team_index': self.current_team_index,
            'current_clue': self.current_clue.to_dict() if self.current_clue else None,
            'guesses_remaining': self.guesses_remaining,
            'guesses_this_turn': self.guesses_this_turn,
            'players': [p.to_dict() for p in self.players],
            'scores': {team: score.to_dict() for team, score in self.scores.items()},
            'eliminated_teams': list(self.eliminated_teams),
            'winner': self.winner,
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, data):
        clue = data.get('current_clue')
        return cls(
            code=data['code'],
            host_id=data.get('host_id'),
            status=data['status'],
            settings=GameSettings.from_dict(data['settings']),
            words=list(data['words']),
            key_card=list(data['key_card']),
            revealed=[bool(r) for r in data['revealed']],
            teams=list(data['teams']),
            current_team_index=int(data.get('current_team_index', 0)),
            current_clue=Clue(word=clue['word'], count=clue['count']) if clue else None,
            guesses_remaining=data.get('guesses_remaining', 0),
            guesses_this_turn=int(data.get('guesses_this_turn', 0)),
            players=[Player.from_dict(p) for p in data.get('players', [])],
            scores={
                team: TeamScore(found=s['found'], total=s['total'])
                for team, s in data['scores'].items()
            },
            eliminated_teams=list(data.get('eliminated_teams', [])),
            winner=data.get('winner'),
            created_at=float(data.get('created_at') or time.time()),
        )
