"""Board generation: word labels, the secret key card, and score totals."""
import random
from typing import Dict, List, Tuple

from .errors import InvalidInput
from .session import ASSASSIN, NEUTRAL, GameSettings, TeamScore
from .words import get_word_source


def team_card_counts(settings: GameSettings) -> Dict[str, int]:
    """Cards per active team; the first team in turn order gets one extra."""
    counts = {}
    for index, team in enumerate(settings.active_teams):
        bonus = 1 if index == 0 and settings.first_team_bonus else 0
        counts[team] = settings.words_per_team + bonus
    return counts


def neutral_count(settings: GameSettings) -> int:
    team_cards = sum(team_card_counts(settings).values())
    return settings.card_count - team_cards - settings.assassin_count


def generate_key_card(settings: GameSettings, rng=None) -> List[str]:
    neutrals = neutral_count(settings)
    if neutrals < 0:
        raise InvalidInput(
            f'{settings.card_count} cards cannot hold {settings.words_per_team} words per team '
            f'for {settings.team_count} teams and {settings.assassin_count} assassin(s)'
        )

    card_types = []
    for team, count in team_card_counts(settings).items():
        card_types.extend([team] * count)
    card_types.extend([ASSASSIN] * settings.assassin_count)
    card_types.extend([NEUTRAL] * neutrals)

    # random.shuffle is a Fisher-Yates shuffle
    (rng or random).shuffle(card_types)
    return card_types


def generate_board(settings: GameSettings, word_source=None, rng=None) -> Tuple[List[str], List[str]]:
    """Return ``(words, key_card)`` for a fresh board, index-aligned."""
    key_card = generate_key_card(settings, rng=rng)
    source = word_source or get_word_source(settings.language)
    words = source.sample(settings.card_count, rng=rng)
    return words, key_card


def initialize_scores(settings: GameSettings) -> Dict[str, TeamScore]:
    return {
        team: TeamScore(found=0, total=total)
        for team, total in team_card_counts(settings).items()
    }
