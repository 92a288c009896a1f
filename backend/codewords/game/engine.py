"""Turn state machine.

Every public function takes the session plus the acting player's id,
checks all of its preconditions first and only then mutates. A raised
``GameError`` therefore always leaves the session exactly as it was.

States: lobby -> playing -> finished. ``regenerate_board`` is the only way
back to lobby.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .board import generate_board, initialize_scores
from .errors import Forbidden, InvalidInput, InvalidState, NotFound
from .session import (
    ASSASSIN, BOARD_DIMENSIONS, FINISHED, LOBBY, MAX_TEAMS, MIN_TEAMS, NEUTRAL,
    OPERATIVE, PLAYING, ROLES, SPECTATOR, SPYMASTER,
    Clue, GameSession, GameSettings, Player,
    default_assassin_count, default_words_per_team,
)
from .words import get_word_source

MAX_CLUE_COUNT = 50

_BOOL_SETTINGS = ('extra_guess', 'first_team_bonus')


@dataclass
class GuessOutcome:
    index: int
    card_type: str
    turn_ended: bool
    winner: Optional[str] = None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_player(session: GameSession, player_id) -> Player:
    player = session.find_player(player_id)
    if player is None:
        raise NotFound('You are not a player in this game')
    return player


def _require_host(session: GameSession, player_id, action) -> Player:
    player = _require_player(session, player_id)
    if not player.is_host:
        raise Forbidden(f'Only the host can {action}')
    return player


def _require_text(value, label) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f'{label} cannot be empty')
    return value.strip()


def merge_settings(base: GameSettings, patch) -> GameSettings:
    """Validate ``patch`` and return a new settings object; ``base`` is untouched."""
    if patch is None:
        patch = {}
    if not isinstance(patch, dict):
        raise InvalidInput('Settings must be an object')
    known = set(GameSettings().to_dict())
    unknown = sorted(set(patch) - known)
    if unknown:
        raise InvalidInput(f"Unknown setting(s): {', '.join(unknown)}")

    merged = base.to_dict()
    merged.update(patch)

    if not isinstance(merged['board_size'], str) or merged['board_size'] not in BOARD_DIMENSIONS:
        raise InvalidInput(f"Unknown board size: {merged['board_size']}")
    if not _is_int(merged['team_count']) or not MIN_TEAMS <= merged['team_count'] <= MAX_TEAMS:
        raise InvalidInput(f'Team count must be between {MIN_TEAMS} and {MAX_TEAMS}')

    # Board size or team count changed without explicit counts: use that layout's defaults
    if ('board_size' in patch or 'team_count' in patch) and 'words_per_team' not in patch:
        merged['words_per_team'] = default_words_per_team(merged['board_size'], merged['team_count'])
    if 'board_size' in patch and 'assassin_count' not in patch:
        merged['assassin_count'] = default_assassin_count(merged['board_size'])

    if not _is_int(merged['words_per_team']) or merged['words_per_team'] < 1:
        raise InvalidInput('Words per team must be a positive whole number')
    if not _is_int(merged['assassin_count']) or merged['assassin_count'] < 0:
        raise InvalidInput('Assassin count must be a non-negative whole number')
    if not isinstance(merged['language'], str):
        raise InvalidInput('Language must be a string')
    get_word_source(merged['language'])
    for name in _BOOL_SETTINGS:
        if not isinstance(merged[name], bool):
            raise InvalidInput(f'{name} must be true or false')

    return GameSettings.from_dict(merged)


def create_session(code, settings=None, host_id=None, word_source=None, rng=None) -> GameSession:
    """Build a fresh lobby session; ``settings`` is an optional patch over the defaults."""
    full_settings = merge_settings(GameSettings(), settings)
    words, key_card = generate_board(full_settings, word_source=word_source, rng=rng)
    return GameSession(
        code=code,
        host_id=host_id,
        settings=full_settings,
        words=words,
        key_card=key_card,
        revealed=[False] * len(words),
        teams=full_settings.active_teams,
        scores=initialize_scores(full_settings),
    )


def _reset_board(session, settings, words, key_card):
    session.settings = settings
    session.words = words
    session.key_card = key_card
    session.revealed = [False] * len(words)
    session.teams = settings.active_teams
    session.scores = initialize_scores(settings)
    session.current_team_index = 0
    session.current_clue = None
    session.guesses_remaining = 0
    session.guesses_this_turn = 0
    session.eliminated_teams = []
    session.winner = None


def update_settings(session: GameSession, player_id, patch, word_source=None, rng=None) -> bool:
    """Merge ``patch`` into the lobby settings and redeal the board.

    Returns False when the patch changes nothing.
    """
    _require_host(session, player_id, 'change settings')
    if session.status != LOBBY:
        raise InvalidState('Cannot change settings after the game has started')
    new_settings = merge_settings(session.settings, patch)
    if new_settings == session.settings:
        return False
    words, key_card = generate_board(new_settings, word_source=word_source, rng=rng)

    _reset_board(session, new_settings, words, key_card)
    for player in session.players:
        if player.team is not None and player.team not in session.teams:
            player.team = None
            player.role = None
    return True


def regenerate_board(session: GameSession, player_id, word_source=None, rng=None) -> None:
    """Deal a new board and return to the lobby, keeping code, host, settings and roster."""
    _require_host(session, player_id, 'regenerate the board')
    words, key_card = generate_board(session.settings, word_source=word_source, rng=rng)
    _reset_board(session, session.settings, words, key_card)
    session.status = LOBBY


def select_team_and_role(session: GameSession, player_id, team, role) -> Player:
    player = _require_player(session, player_id)
    if session.status == FINISHED:
        raise InvalidState('The game is over')
    if role is not None and role not in ROLES:
        raise InvalidInput(f'Unknown role: {role}')
    if team is not None and team not in session.teams:
        raise InvalidInput(f'Unknown team: {team}')

    if role == SPECTATOR:
        player.team = None
        player.role = SPECTATOR
        return player

    if role in (SPYMASTER, OPERATIVE) and team is None:
        raise InvalidInput(f'Choose a team to play as {role}')
    if role == SPYMASTER:
        holder = session.spymaster_for(team)
        if holder is not None and holder.id != player.id:
            raise Forbidden(f'Spymaster role is already taken for {team} team')

    player.team = team
    player.role = role
    return player


def start_game(session: GameSession, player_id) -> None:
    _require_host(session, player_id, 'start the game')
    if session.status != LOBBY:
        raise InvalidState('Game has already started')
    for team in session.teams:
        members = [p for p in session.players if p.team == team]
        if not any(p.role == SPYMASTER for p in members):
            raise InvalidState(f'{team} team needs a spymaster')
        if not any(p.role == OPERATIVE for p in members):
            raise InvalidState(f'{team} team needs at least one operative')

    session.status = PLAYING
    session.current_team_index = 0
    session.current_clue = None
    session.guesses_remaining = 0
    session.guesses_this_turn = 0


def _require_turn(session: GameSession, player_id) -> Player:
    if session.status != PLAYING:
        raise InvalidState('The game is not in progress')
    player = _require_player(session, player_id)
    if player.team != session.current_team:
        raise Forbidden("It's not your team's turn")
    return player


def give_clue(session: GameSession, player_id, word, count) -> Clue:
    player = _require_turn(session, player_id)
    if player.role != SPYMASTER:
        raise Forbidden('Only the spymaster can give clues')
    if session.current_clue is not None:
        raise InvalidState('A clue has already been given this turn')
    clue_word = _require_text(word, 'Clue').upper()
    if not _is_int(count) or count < 0:
        raise InvalidInput('Clue count must be a non-negative whole number')
    if count > MAX_CLUE_COUNT:
        raise InvalidInput('Clue count is too large')

    session.current_clue = Clue(word=clue_word, count=count)
    if count == 0:
        session.guesses_remaining = None
    else:
        session.guesses_remaining = count + (1 if session.settings.extra_guess else 0)
    session.guesses_this_turn = 0
    return session.current_clue


def _has_guesses_left(session) -> bool:
    return session.guesses_remaining is None or session.guesses_remaining > 0


def advance_turn(session: GameSession) -> None:
    """Clear the clue and move to the next team that is still in play."""
    session.current_clue = None
    session.guesses_remaining = 0
    session.guesses_this_turn = 0
    team_count = len(session.teams)
    for _ in range(team_count):
        session.current_team_index = (session.current_team_index + 1) % team_count
        if session.current_team not in session.eliminated_teams:
            break


def _finish(session: GameSession, winner) -> None:
    session.winner = winner
    session.status = FINISHED
    session.current_clue = None
    session.guesses_remaining = 0


def guess_word(session: GameSession, player_id, word_index) -> GuessOutcome:
    player = _require_turn(session, player_id)
    if player.role != OPERATIVE:
        raise Forbidden('Only operatives can guess')
    if session.current_clue is None:
        raise InvalidState('Wait for the spymaster to give a clue')
    if not _has_guesses_left(session):
        raise InvalidState('No guesses remaining this turn')
    if not _is_int(word_index) or not 0 <= word_index < len(session.words):
        raise InvalidInput('Invalid word index')
    if session.revealed[word_index]:
        raise InvalidState('This card has already been revealed')

    team = session.current_team
    card_type = session.key_card[word_index]
    session.revealed[word_index] = True
    if session.guesses_remaining is not None:
        session.guesses_remaining -= 1
    session.guesses_this_turn += 1

    outcome = GuessOutcome(index=word_index, card_type=card_type, turn_ended=True)
    if card_type == ASSASSIN:
        session.eliminated_teams.append(team)
        remaining = session.active_teams
        if len(remaining) == 1:
            _finish(session, remaining[0])
        else:
            advance_turn(session)
    elif card_type == team:
        score = session.scores[team]
        score.found += 1
        if score.found >= score.total:
            _finish(session, team)
        elif not _has_guesses_left(session):
            advance_turn(session)
        else:
            outcome.turn_ended = False
    elif card_type == NEUTRAL:
        advance_turn(session)
    else:
        other = session.scores[card_type]
        other.found += 1
        advance_turn(session)
        # An eliminated team's cards still count as found but cannot win
        if other.found >= other.total and card_type not in session.eliminated_teams:
            _finish(session, card_type)

    outcome.winner = session.winner
    return outcome


def end_turn(session: GameSession, player_id) -> None:
    _require_turn(session, player_id)
    advance_turn(session)


def join(session: GameSession, player_id, name) -> Tuple[Player, bool]:
    """Add a player, or rename one reconnecting with a known id.

    Returns ``(player, created)``.
    """
    player_id = _require_text(player_id, 'Player ID')
    name = _require_text(name, 'Name')
    player = session.find_player(player_id)
    if player is not None:
        player.name = name
        return player, False

    player = Player(id=player_id, name=name, is_host=not session.players)
    if player.is_host:
        session.host_id = player.id
    session.players.append(player)
    return player, True


def leave(session: GameSession, player_id) -> Player:
    player = _require_player(session, player_id)
    session.players.remove(player)
    if player.is_host:
        player.is_host = False
        if session.players:
            successor = session.players[0]
            successor.is_host = True
            session.host_id = successor.id
        else:
            session.host_id = None
    return player
