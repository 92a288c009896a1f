import inspect
import threading

import pytest

import codewords
import codewords.gateway as gateway_module
from codewords.game.errors import InvalidInput, InvalidState, NotFound, StoreUnavailable
from codewords.gateway import MembershipRegistry, RoomLocks

from conftest import card_index, new_session

SEATS = [
    ('sid-rs', 'red-spy', 'red', 'spymaster'),
    ('sid-ro', 'red-op', 'red', 'operative'),
    ('sid-bs', 'blue-spy', 'blue', 'spymaster'),
    ('sid-bo', 'blue-op', 'blue', 'operative'),
]


def _join(gateway, sid, code, player_id, name=None):
    gateway.handle_join(sid, {'game_code': code, 'player_id': player_id, 'name': name or player_id})


def _seat_room(gateway, emitter, start=False):
    code = gateway.create_game().code
    for sid, player_id, team, role in SEATS:
        _join(gateway, sid, code, player_id)
        gateway.handle_select_team(sid, {'team': team, 'role': role})
    if start:
        gateway.handle_start_game('sid-rs')
    emitter.clear()
    return code


def _stub_session(code):
    session = new_session()
    session.code = code
    return session


def _event_names(emitter, sid):
    return [event for event, _ in emitter.events(sid)]


class FlakyRepository:
    """Fails the next ``failures`` loads, then behaves like ``inner``. Counts loads and saves."""

    def __init__(self, inner, failures):
        self.inner = inner
        self.failures = failures
        self.loads = 0
        self.saves = 0

    def load(self, code):
        self.loads += 1
        if self.failures > 0:
            self.failures -= 1
            raise StoreUnavailable('connection reset')
        return self.inner.load(code)

    def save(self, session):
        self.saves += 1
        return self.inner.save(session)

    def __getattr__(self, name):
        return getattr(self.inner, name)


# ---- registry and locks ----

def test_app_singleton_does_not_hide_gateway_module():
    assert inspect.ismodule(gateway_module)
    assert gateway_module.generate_room_code
    assert isinstance(codewords.session_gateway, gateway_module.SessionGateway)



def test_room_lock_is_shared_per_code():
    locks = RoomLocks()
    assert locks.for_room('ABC123') is locks.for_room('ABC123')
    assert locks.for_room('ABC123') is not locks.for_room('XYZ789')


def test_registry_moves_connection_between_rooms():
    registry = MembershipRegistry()
    registry.add('s1', 'ROOM1', 'p1')
    registry.add('s2', 'ROOM1', 'p2')
    registry.add('s1', 'ROOM2', 'p1')

    assert [m.sid for m in registry.connections('ROOM1')] == ['s2']
    assert registry.get('s1').code == 'ROOM2'
    assert registry.stats() == {'rooms': {'ROOM1': 1, 'ROOM2': 1}, 'connections': 2}

    registry.remove('s2')
    registry.remove('s2')
    assert registry.connections('ROOM1') == []
    assert 'ROOM1' not in registry.stats()['rooms']


# ---- creation ----

def test_create_game_persists_lobby(gateway, memory_repository):
    session = gateway.create_game({'board_size': 'small'}, host_id='host-1')
    assert session.host_id == 'host-1'
    assert session.status == 'lobby'
    assert len(session.words) == 16
    assert memory_repository.load(session.code) == session


def test_create_game_generates_host_id(gateway):
    assert gateway.create_game().host_id


@pytest.mark.parametrize('host_id', ['', '   ', 7])
def test_create_game_rejects_bad_host_id(gateway, host_id):
    with pytest.raises(InvalidInput):
        gateway.create_game(host_id=host_id)


def test_create_game_rejects_bad_settings(gateway):
    with pytest.raises(InvalidInput):
        gateway.create_game({'team_count': 9})


def test_create_game_skips_taken_codes(gateway, monkeypatch):
    codes = iter(['TAKEN2', 'TAKEN2', 'FRESH3'])
    monkeypatch.setattr(gateway_module, 'generate_room_code', lambda rng=None: next(codes))
    gateway.repository.save(_stub_session('TAKEN2'))
    assert gateway.create_game().code == 'FRESH3'


def test_create_game_gives_up_after_repeated_collisions(gateway, monkeypatch):
    monkeypatch.setattr(gateway_module, 'generate_room_code', lambda rng=None: 'TAKEN2')
    gateway.repository.save(_stub_session('TAKEN2'))
    with pytest.raises(InvalidState):
        gateway.create_game()


# ---- join / leave / disconnect ----

def test_joiner_gets_snapshot_others_get_notice_then_state(gateway, emitter):
    code = gateway.create_game().code
    _join(gateway, 's1', code.lower(), 'p1', 'Alice')
    assert _event_names(emitter, 's1') == ['game_state']
    first = emitter.payloads('s1', 'game_state')[0]
    assert first['host_id'] == 'p1'
    assert [p['id'] for p in first['players']] == ['p1']

    emitter.clear()
    _join(gateway, 's2', code, 'p2', 'Bob')
    assert _event_names(emitter, 's2') == ['game_state']
    assert _event_names(emitter, 's1') == ['player_joined', 'game_state']
    assert emitter.payloads('s1', 'player_joined')[0]['player']['name'] == 'Bob'


def test_join_unknown_game(gateway, emitter):
    _join(gateway, 's1', 'NOPE42', 'p1')
    assert emitter.events('s1') == [('error', {'message': 'Game not found', 'kind': 'not_found'})]
    assert gateway.members.get('s1') is None


@pytest.mark.parametrize('data', [None, 'ABC123', {'player_id': 'p1', 'name': 'A'}, {'game_code': '  '}])
def test_join_malformed_payload(gateway, emitter, data):
    gateway.handle_join('s1', data)
    assert [d['kind'] for d in emitter.payloads('s1', 'error')] == ['invalid_input']


def test_join_with_missing_name_is_rejected(gateway, emitter):
    code = gateway.create_game().code
    gateway.handle_join('s1', {'game_code': code, 'player_id': 'p1'})
    assert emitter.payloads('s1', 'error')[0]['kind'] == 'invalid_input'
    assert gateway.repository.load(code).players == []


def test_actions_before_join_are_rejected(gateway, emitter):
    gateway.handle_start_game('lonely')
    gateway.handle_give_clue('lonely', {'word': 'X', 'count': 1})
    errors = emitter.payloads('lonely', 'error')
    assert [e['kind'] for e in errors] == ['not_found', 'not_found']
    assert errors[0]['message'] == 'Join a game first'


def test_disconnect_keeps_the_seat(gateway, emitter):
    code = _seat_room(gateway, emitter, start=True)
    assert gateway.handle_disconnect('sid-ro').player_id == 'red-op'
    assert gateway.handle_disconnect('sid-ro') is None

    gateway.handle_end_turn('sid-rs')
    assert _event_names(emitter, 'sid-ro') == []
    assert gateway.repository.load(code).find_player('red-op') is not None

    _join(gateway, 'sid-ro-2', code, 'red-op', 'Red Again')
    session = gateway.repository.load(code)
    assert len(session.players) == 4
    assert session.find_player('red-op').role == 'operative'


def test_leave_drops_every_connection_of_the_player(gateway, emitter):
    code = _seat_room(gateway, emitter)
    _join(gateway, 'sid-rs-tab2', code, 'red-spy')
    emitter.clear()

    gateway.handle_leave('sid-rs')
    assert gateway.members.get('sid-rs') is None
    assert gateway.members.get('sid-rs-tab2') is None
    notice = emitter.payloads('sid-bo', 'player_left')
    assert notice == [{'player_id': 'red-spy', 'player_name': 'red-spy'}]
    assert emitter.payloads('sid-bo', 'game_state')[-1]['host_id'] == 'red-op'
    assert emitter.events('sid-rs') == []

    session = gateway.repository.load(code)
    assert session.host_id == 'red-op'
    assert session.find_player('red-spy') is None


# ---- broadcasts ----

def test_state_is_projected_per_role(gateway, emitter):
    _seat_room(gateway, emitter, start=True)
    gateway.handle_give_clue('sid-rs', {'word': 'animal', 'count': 2})

    for sid in ('sid-rs', 'sid-bs'):
        state = emitter.payloads(sid, 'game_state')[-1]
        assert state['view'] == 'spymaster'
        assert len(state['key_card']) == 25
    for sid in ('sid-ro', 'sid-bo'):
        state = emitter.payloads(sid, 'game_state')[-1]
        assert state['view'] == 'player'
        assert 'key_card' not in state
        assert state['current_clue'] == {'word': 'ANIMAL', 'count': 2}
        assert state['guesses_remaining'] == 3


def test_rejection_reaches_only_the_sender(gateway, emitter):
    code = _seat_room(gateway, emitter)
    before = gateway.repository.load(code).to_dict()

    gateway.handle_start_game('sid-bo')
    assert emitter.events('sid-bo') == [
        ('error', {'message': 'Only the host can start the game', 'kind': 'forbidden'})
    ]
    for sid in ('sid-rs', 'sid-ro', 'sid-bs'):
        assert emitter.events(sid) == []
    assert gateway.repository.load(code).to_dict() == before


def test_spymaster_conflict_is_forbidden(gateway, emitter):
    code = _seat_room(gateway, emitter)
    _join(gateway, 'sid-late', code, 'late')
    emitter.clear()
    gateway.handle_select_team('sid-late', {'team': 'red', 'role': 'spymaster'})
    assert emitter.payloads('sid-late', 'error')[0]['kind'] == 'forbidden'
    assert gateway.repository.load(code).spymaster_for('red').id == 'red-spy'


def test_settings_update_notifies_room(gateway, emitter):
    _seat_room(gateway, emitter)
    gateway.handle_update_settings('sid-rs', {'settings': {'board_size': 'large'}})
    for sid, *_ in SEATS:
        assert _event_names(emitter, sid) == ['settings_updated', 'game_state']
        assert emitter.payloads(sid, 'settings_updated')[0]['settings']['board_size'] == 'large'
        assert len(emitter.payloads(sid, 'game_state')[0]['words']) == 36


def test_identical_settings_are_neither_saved_nor_broadcast(gateway, emitter):
    _seat_room(gateway, emitter)
    counting = FlakyRepository(gateway.repository, failures=0)
    gateway.repository = counting

    gateway.handle_update_settings('sid-rs', {'settings': {'board_size': 'standard'}})
    assert counting.saves == 0
    for sid, *_ in SEATS:
        assert emitter.events(sid) == []

    gateway.handle_update_settings('sid-rs', {'settings': {'extra_guess': False}})
    assert counting.saves == 1
    assert _event_names(emitter, 'sid-bo') == ['settings_updated', 'game_state']


def test_guess_flow_over_the_gateway(gateway, emitter):
    code = _seat_room(gateway, emitter, start=True)
    gateway.handle_give_clue('sid-rs', {'word': 'ANIMAL', 'count': 1})
    index = card_index(gateway.repository.load(code), 'blue')
    emitter.clear()

    gateway.handle_guess_word('sid-ro', {'word_index': index})
    state = emitter.payloads('sid-bo', 'game_state')[-1]
    assert state['revealed_cards'][index] == 'blue'
    assert state['scores']['blue']['found'] == 1
    assert state['teams'][state['current_team_index']] == 'blue'


def test_regenerate_board_returns_room_to_lobby(gateway, emitter):
    code = _seat_room(gateway, emitter, start=True)
    gateway.handle_regenerate_board('sid-rs')
    assert emitter.payloads('sid-bo', 'game_state')[-1]['status'] == 'lobby'
    assert gateway.repository.load(code).status == 'lobby'


def test_rooms_are_independent(gateway, emitter):
    first = _seat_room(gateway, emitter, start=True)
    second = gateway.create_game().code
    _join(gateway, 'other', second, 'stranger')
    emitter.clear()

    gateway.handle_end_turn('sid-ro')
    assert emitter.events('other') == []
    assert gateway.repository.load(first).current_team == 'blue'
    assert gateway.repository.load(second).players[0].id == 'stranger'


def test_malformed_event_payload(gateway, emitter):
    _seat_room(gateway, emitter, start=True)
    gateway.handle_guess_word('sid-ro', ['not', 'a', 'dict'])
    assert emitter.payloads('sid-ro', 'error')[0]['kind'] == 'invalid_input'


# ---- concurrency ----

def test_racing_guesses_on_one_card_apply_once(gateway, emitter):
    code = _seat_room(gateway, emitter, start=True)
    _join(gateway, 'sid-ro-b', code, 'red-op')
    gateway.handle_give_clue('sid-rs', {'word': 'ANIMAL', 'count': 3})
    index = card_index(gateway.repository.load(code), 'red')
    emitter.clear()

    barrier = threading.Barrier(2)

    def guess(sid):
        barrier.wait()
        gateway.handle_guess_word(sid, {'word_index': index})

    threads = [threading.Thread(target=guess, args=(sid,)) for sid in ('sid-ro', 'sid-ro-b')]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    errors = emitter.payloads('sid-ro', 'error') + emitter.payloads('sid-ro-b', 'error')
    assert [e['kind'] for e in errors] == ['invalid_state']
    session = gateway.repository.load(code)
    assert session.guesses_this_turn == 1
    assert session.scores['red'].found == 1
    assert sum(session.revealed) == 1


def test_concurrent_joins_all_land(gateway, emitter):
    code = gateway.create_game().code
    threads = [
        threading.Thread(target=_join, args=(gateway, f's{i}', code, f'p{i}'))
        for i in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    session = gateway.repository.load(code)
    assert sorted(p.id for p in session.players) == sorted(f'p{i}' for i in range(8))
    assert sum(p.is_host for p in session.players) == 1
    assert gateway.members.stats()['connections'] == 8


# ---- storage failures ----

def test_transient_store_failure_is_retried(gateway, emitter):
    code = _seat_room(gateway, emitter, start=True)
    gateway.repository = FlakyRepository(gateway.repository, failures=2)

    gateway.handle_end_turn('sid-ro')
    assert emitter.payloads('sid-ro', 'error') == []
    assert gateway.repository.loads == 3
    assert gateway.repository.load(code).current_team == 'blue'


def test_store_outage_reports_to_sender_only(gateway, emitter):
    code = _seat_room(gateway, emitter, start=True)
    flaky = FlakyRepository(gateway.repository, failures=10)
    gateway.repository = flaky

    gateway.handle_end_turn('sid-ro')
    assert flaky.loads == gateway.retry_attempts
    assert emitter.events('sid-ro') == [('error', {
        'message': 'Lost connection to game storage, please try again',
        'kind': 'store_unavailable',
    })]
    for sid in ('sid-rs', 'sid-bs', 'sid-bo'):
        assert emitter.events(sid) == []
    assert flaky.inner.load(code).current_team == 'red'


# ---- read side ----

def test_public_state_hides_key_card(gateway):
    session = gateway.create_game()
    state = gateway.public_state(session.code.lower())
    assert state['view'] == 'player'
    assert 'key_card' not in state
    assert state['revealed_cards'] == [None] * 25


def test_public_state_errors(gateway):
    with pytest.raises(NotFound):
        gateway.public_state('NOPE42')
    with pytest.raises(InvalidInput):
        gateway.public_state('  ')
