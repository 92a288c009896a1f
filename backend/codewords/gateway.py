"""Session gateway: the single writer for every room.

Client events arrive here from the Socket.IO handlers. For each event the
gateway takes the room's lock, loads the session from the repository, applies
one engine operation, saves, and emits a role-scoped ``game_state`` to every
connection joined to that room, all before releasing the lock. Rejections go
back to the originating connection only.
"""
import logging
import random
import threading
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Set
from uuid import uuid4

from codewords.game import engine
from codewords.game.errors import GameError, InvalidInput, InvalidState, NotFound, StoreUnavailable
from codewords.game.session import GameSession, generate_room_code
from codewords.game.views import project_view

MAX_CODE_ATTEMPTS = 10


class RoomLocks:
    """One mutex per room code, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def for_room(self, code: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(code)
            if lock is None:
                lock = self._locks[code] = threading.Lock()
            return lock


@dataclass(frozen=True)
class Membership:
    sid: str
    code: str
    player_id: str


class MembershipRegistry:
    """Which connection is joined to which room, as which player."""

    def __init__(self):
        self._lock = threading.RLock()
        self._by_sid: Dict[str, Membership] = {}
        self._by_room: Dict[str, Set[str]] = {}

    def add(self, sid, code, player_id) -> Membership:
        with self._lock:
            self.remove(sid)
            membership = Membership(sid=sid, code=code, player_id=player_id)
            self._by_sid[sid] = membership
            self._by_room.setdefault(code, set()).add(sid)
            return membership

    def remove(self, sid) -> Optional[Membership]:
        with self._lock:
            membership = self._by_sid.pop(sid, None)
            if membership is not None:
                bucket = self._by_room.get(membership.code)
                if bucket is not None:
                    bucket.discard(sid)
                    if not bucket:
                        self._by_room.pop(membership.code, None)
            return membership

    def get(self, sid) -> Optional[Membership]:
        with self._lock:
            return self._by_sid.get(sid)

    def connections(self, code) -> List[Membership]:
        # Snapshot, so emitting never iterates a set that another thread changes
        with self._lock:
            return [self._by_sid[sid] for sid in sorted(self._by_room.get(code, ()))]

    def player_connections(self, code, player_id) -> List[Membership]:
        return [m for m in self.connections(code) if m.player_id == player_id]

    def stats(self) -> dict:
        with self._lock:
            return {
                'rooms': {code: len(sids) for code, sids in self._by_room.items()},
                'connections': len(self._by_sid),
            }


def _payload(data) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput('Event payload must be an object')
    return data


def _require_code(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput('game_code is required')
    return value.strip().upper()


class SessionGateway:
    def __init__(self, repository=None, emitter=None, logger=None, namespace='/ws',
                 retry_attempts=3, retry_backoff=0.05, word_source=None, rng=None):
        self.repository = repository
        self.emitter = emitter
        self.logger = logger or logging.getLogger('codewords.gateway')
        self.namespace = namespace
        self.retry_attempts = max(1, retry_attempts)
        self.retry_backoff = retry_backoff
        self.word_source = word_source
        self.rng = rng or random.Random()
        self.locks = RoomLocks()
        self.members = MembershipRegistry()

    def init_app(self, app, repository, emitter=None):
        self.repository = repository
        self.emitter = emitter
        self.logger = app.logger
        self.retry_attempts = max(1, int(app.config.get('STORE_RETRY_ATTEMPTS', 3)))
        self.retry_backoff = int(app.config.get('STORE_RETRY_BACKOFF_MS', 50)) / 1000.0
        self.locks = RoomLocks()
        self.members = MembershipRegistry()
        app.extensions['codewords_gateway'] = self

    # ---- emit helpers ----

    def _emit(self, sid, event, payload):
        self.emitter.emit(event, payload, to=sid, namespace=self.namespace)

    def _emit_error(self, sid, exc: GameError):
        self._emit(sid, 'error', exc.to_dict())

    def _emit_room(self, code, event, payload, skip_sid=None):
        for member in self.members.connections(code):
            if member.sid != skip_sid:
                self._emit(member.sid, event, payload)

    def broadcast_state(self, session: GameSession, skip_sid=None):
        for member in self.members.connections(session.code):
            if member.sid == skip_sid:
                continue
            self._emit(member.sid, 'game_state', project_view(session, member.player_id).to_dict())

    # ---- core ----

    def _with_retries(self, fn, tag):
        attempt = 0
        while True:
            try:
                return fn()
            except StoreUnavailable as exc:
                attempt += 1
                if attempt >= self.retry_attempts:
                    self.logger.error(f"[store-failed] op={tag} attempts={attempt}: {exc}")
                    raise StoreUnavailable('Lost connection to game storage, please try again') from exc
                delay = self.retry_backoff * (2 ** (attempt - 1))
                self.logger.warning(f"[store-retry] op={tag} attempt={attempt} retry_in={delay:.3f}s")
                time.sleep(delay)

    def _mutate(self, code, tag, mutation, after=None, unchanged=None):
        """Load, apply, save and broadcast while holding the room lock.

        ``mutation(session)`` raises ``GameError`` to reject; its return
        value is handed to ``after(session, result)`` which runs before the
        state broadcast. When ``unchanged(result)`` is true nothing is saved
        or broadcast.
        """
        def cycle():
            session = self.repository.load(code)
            result = mutation(session)
            if unchanged is None or not unchanged(result):
                self.repository.save(session)
            return session, result

        with self.locks.for_room(code):
            session, result = self._with_retries(cycle, tag)
            if unchanged is not None and unchanged(result):
                return session, result
            skip_sid = after(session, result) if after else None
            self.broadcast_state(session, skip_sid=skip_sid)
            return session, result

    def _dispatch(self, sid, tag, action):
        try:
            return action()
        except GameError as exc:
            self.logger.info(f"[{tag}-rejected] sid={sid} kind={exc.kind} reason={exc.message}")
            self._emit_error(sid, exc)
            return None

    def _require_member(self, sid) -> Membership:
        member = self.members.get(sid)
        if member is None:
            raise NotFound('Join a game first')
        return member

    def _player_action(self, sid, tag, apply, after=None, unchanged=None):
        def action():
            member = self._require_member(sid)
            session, result = self._mutate(
                member.code, tag, lambda s: apply(s, member.player_id), after, unchanged
            )
            self.logger.info(f"[{tag}] game={member.code} player={member.player_id} status={session.status}")
            return result
        return self._dispatch(sid, tag, action)

    # ---- lifecycle outside the event channel ----

    def create_game(self, settings=None, host_id=None) -> GameSession:
        """Create and persist a lobby session under a fresh, unused room code."""
        if host_id is not None and (not isinstance(host_id, str) or not host_id.strip()):
            raise InvalidInput('host_id must be a non-empty string')
        host_id = host_id.strip() if host_id else uuid4().hex
        session = engine.create_session(
            None, settings=settings, host_id=host_id, word_source=self.word_source, rng=self.rng
        )
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_room_code(self.rng)
            with self.locks.for_room(code):
                if self._with_retries(lambda: self.repository.exists(code), 'exists'):
                    continue
                session.code = code
                self._with_retries(lambda: self.repository.save(session), 'create')
            self.logger.info(f"[create] game={code} host={host_id} settings={session.settings.to_dict()}")
            return session
        raise InvalidState('Failed to generate a unique room code')

    def public_state(self, code) -> dict:
        code = _require_code(code)
        session = self._with_retries(lambda: self.repository.load(code), 'state')
        return project_view(session).to_dict()

    # ---- client events ----

    def handle_join(self, sid, data):
        def action():
            payload = _payload(data)
            code = _require_code(payload.get('game_code'))
            player_id = payload.get('player_id')
            name = payload.get('name')

            def after(session, result):
                player, created = result
                self.members.add(sid, session.code, player.id)
                # The joiner gets a full snapshot before anything else reaches it
                self._emit(sid, 'game_state', project_view(session, player.id).to_dict())
                self._emit_room(session.code, 'player_joined', {'player': player.to_dict()}, skip_sid=sid)
                self.logger.info(
                    f"[join] game={session.code} player={player.id} name={player.name} "
                    f"{'new' if created else 'reconnect'}"
                )
                return sid

            self._mutate(code, 'join', lambda s: engine.join(s, player_id, name), after)
        return self._dispatch(sid, 'join', action)

    def handle_leave(self, sid):
        def action():
            member = self._require_member(sid)

            def after(session, player):
                for conn in self.members.player_connections(session.code, player.id):
                    self.members.remove(conn.sid)
                self._emit_room(session.code, 'player_left', {'player_id': player.id, 'player_name': player.name})
                self.logger.info(f"[leave] game={session.code} player={player.id} host={session.host_id}")
                return None

            self._mutate(member.code, 'leave', lambda s: engine.leave(s, member.player_id), after)
            return member
        return self._dispatch(sid, 'leave', action)

    def handle_disconnect(self, sid):
        # The player keeps its seat; only the connection goes away
        member = self.members.remove(sid)
        if member is not None:
            self.logger.info(f"[disconnect] game={member.code} player={member.player_id} sid={sid}")
        return member

    def handle_update_settings(self, sid, data):
        def apply(session, player_id):
            patch = _payload(data).get('settings')
            return engine.update_settings(
                session, player_id, patch, word_source=self.word_source, rng=self.rng
            )

        def after(session, changed):
            self._emit_room(session.code, 'settings_updated', {'settings': session.settings.to_dict()})
            return None

        return self._player_action(
            sid, 'update_settings', apply, after, unchanged=lambda changed: not changed
        )

    def handle_select_team(self, sid, data):
        def apply(session, player_id):
            payload = _payload(data)
            return engine.select_team_and_role(session, player_id, payload.get('team'), payload.get('role'))
        return self._player_action(sid, 'select_team', apply)

    def handle_start_game(self, sid):
        return self._player_action(sid, 'start_game', engine.start_game)

    def handle_give_clue(self, sid, data):
        def apply(session, player_id):
            payload = _payload(data)
            return engine.give_clue(session, player_id, payload.get('word'), payload.get('count'))
        return self._player_action(sid, 'give_clue', apply)

    def handle_guess_word(self, sid, data):
        def apply(session, player_id):
            return engine.guess_word(session, player_id, _payload(data).get('word_index'))

        def after(session, outcome):
            self.logger.info(
                f"[guess] game={session.code} index={outcome.index} card={outcome.card_type} "
                f"turn_ended={outcome.turn_ended} winner={outcome.winner}"
            )
            return None

        return self._player_action(sid, 'guess_word', apply, after)

    def handle_end_turn(self, sid):
        return self._player_action(sid, 'end_turn', engine.end_turn)

    def handle_regenerate_board(self, sid):
        def apply(session, player_id):
            return engine.regenerate_board(session, player_id, word_source=self.word_source, rng=self.rng)
        return self._player_action(sid, 'regenerate_board', apply)
