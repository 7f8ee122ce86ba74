"""
Statistical validation for the Crazy Eights engine.

This module checks that the shuffle spreads every card evenly over every
position, and gathers outcome statistics from headless games between two
copies of the computer opponent.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
import scipy.stats as stats

from crazyeights.common.card import Card
from crazyeights.common.deck import create_deck, shuffle
from crazyeights.game.opponent import OpponentPolicy
from crazyeights.game.rules import verify_card_conservation
from crazyeights.game.state import GameState, GameStatus, Seat
from crazyeights.game.transitions import StateTransitionEngine

logger = logging.getLogger(__name__)


@dataclass
class ConfidenceInterval:
    """
    Represents a confidence interval with lower and upper bounds.

    Attributes:
        lower: The lower bound of the confidence interval
        upper: The upper bound of the confidence interval
        confidence: The confidence level (e.g., 0.95 for 95% confidence)
    """

    lower: float
    upper: float
    confidence: float

    def contains(self, value: float) -> bool:
        """Check if the interval contains a value."""
        return self.lower <= value <= self.upper

    def to_dict(self) -> Dict[str, float]:
        """Convert to a dictionary."""
        return {"lower": self.lower, "upper": self.upper, "confidence": self.confidence}


@dataclass
class ShuffleUniformityReport:
    """
    Chi-square goodness of fit of card positions after shuffling.

    Attributes:
        trials: Number of shuffles sampled
        frequencies: 52x52 counts, rows are cards and columns are positions
        chi_square: Per-position chi-square statistics
        p_values: Per-position p-values against the uniform distribution
    """

    trials: int
    frequencies: np.ndarray
    chi_square: np.ndarray
    p_values: np.ndarray

    @property
    def min_p_value(self) -> float:
        return float(self.p_values.min())

    def is_uniform(self, alpha: float = 0.001) -> bool:
        """
        Check every position against ``alpha``, Bonferroni corrected.

        Args:
            alpha: Family-wise significance level

        Returns:
            True if no position deviates significantly from uniform
        """
        return self.min_p_value >= alpha / len(self.p_values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trials": self.trials,
            "min_p_value": self.min_p_value,
            "max_chi_square": float(self.chi_square.max()),
            "uniform": self.is_uniform(),
        }


@dataclass
class SimulationReport:
    """
    Outcomes of policy-against-policy games.

    Attributes:
        games: Number of games played
        player_wins: Games won by the seat that moves first
        opponent_wins: Games won by the other seat
        draws: Stalemate draws
        unfinished: Games stopped by the turn limit
        mean_turns: Average number of moves per game
        player_win_rate: Confidence interval of the first seat's win rate
    """

    games: int
    player_wins: int
    opponent_wins: int
    draws: int
    unfinished: int
    mean_turns: float
    player_win_rate: ConfidenceInterval

    def to_dict(self) -> Dict[str, Any]:
        return {
            "games": self.games,
            "player_wins": self.player_wins,
            "opponent_wins": self.opponent_wins,
            "draws": self.draws,
            "unfinished": self.unfinished,
            "mean_turns": self.mean_turns,
            "player_win_rate": self.player_win_rate.to_dict(),
        }


def position_frequencies(
    trials: int,
    rng: Optional[random.Random] = None,
    shuffle_fn: Callable[[Sequence[Card], Optional[random.Random]], List[Card]] = shuffle,
) -> np.ndarray:
    """
    Count how often each card lands in each position.

    Args:
        trials: Number of shuffles to sample
        rng: Optional random source passed to ``shuffle_fn``
        shuffle_fn: Shuffle under test

    Returns:
        Integer matrix indexed by [card, position], cards in deck order
    """
    deck = create_deck()
    index = {card: i for i, card in enumerate(deck)}
    counts = np.zeros((len(deck), len(deck)), dtype=np.int64)

    for _ in range(trials):
        shuffled = shuffle_fn(deck, rng)
        rows = [index[card] for card in shuffled]
        counts[rows, np.arange(len(deck))] += 1

    return counts


def shuffle_uniformity(
    trials: int = 5200,
    rng: Optional[random.Random] = None,
    shuffle_fn: Callable[[Sequence[Card], Optional[random.Random]], List[Card]] = shuffle,
) -> ShuffleUniformityReport:
    """
    Test every position's card distribution against uniform.

    Args:
        trials: Number of shuffles to sample
        rng: Optional random source
        shuffle_fn: Shuffle under test

    Returns:
        A ShuffleUniformityReport
    """
    frequencies = position_frequencies(trials, rng, shuffle_fn)
    chi_square, p_values = stats.chisquare(frequencies, axis=0)
    report = ShuffleUniformityReport(
        trials=trials,
        frequencies=frequencies,
        chi_square=np.asarray(chi_square),
        p_values=np.asarray(p_values),
    )
    logger.info("Shuffle uniformity over %d trials: %s", trials, report.to_dict())
    return report


def simulation_results(
    num_games: int, seed: Optional[int] = None, max_turns: int = 1000
) -> pd.DataFrame:
    """
    Play the heuristic opponent against itself and tabulate each game.

    Args:
        num_games: Number of games to play
        seed: Seed for deals and card choices, None for the process-wide source
        max_turns: Moves after which a game is abandoned

    Returns:
        DataFrame with one row per game: ``game``, ``outcome`` (player,
        opponent, draw or unfinished), ``turns``, ``player_cards``,
        ``opponent_cards`` and ``draw_pile``
    """
    rng = random.Random(seed) if seed is not None else None
    policies = {
        Seat.PLAYER: OpponentPolicy(Seat.PLAYER, rng),
        Seat.OPPONENT: OpponentPolicy(Seat.OPPONENT, rng),
    }

    rows = []
    state = GameState()

    for game in range(num_games):
        state = StateTransitionEngine.new_game(state, rng)
        turns = 0
        while state.status == GameStatus.PLAYING and turns < max_turns:
            state = policies[state.turn].take_turn(state)
            turns += 1

        verify_card_conservation(state)

        if not state.is_over:
            outcome = "unfinished"
            logger.warning("Game %d abandoned after %d turns", game, turns)
        elif state.winner is None:
            outcome = "draw"
        else:
            outcome = state.winner.value

        rows.append(
            {
                "game": game,
                "outcome": outcome,
                "turns": turns,
                "player_cards": len(state.player_hand),
                "opponent_cards": len(state.opponent_hand),
                "draw_pile": state.draw_pile_count,
            }
        )

    return pd.DataFrame(
        rows,
        columns=[
            "game",
            "outcome",
            "turns",
            "player_cards",
            "opponent_cards",
            "draw_pile",
        ],
    )


def simulate_games(
    num_games: int, seed: Optional[int] = None, max_turns: int = 1000
) -> SimulationReport:
    """
    Summarise policy-against-policy games.

    Args:
        num_games: Number of games to play
        seed: Seed for deals and card choices, None for the process-wide source
        max_turns: Moves after which a game is abandoned

    Returns:
        A SimulationReport
    """
    df = simulation_results(num_games, seed, max_turns)
    counts = df["outcome"].value_counts()
    player_results = (df["outcome"] == Seat.PLAYER.value).astype(float).tolist()

    report = SimulationReport(
        games=num_games,
        player_wins=int(counts.get(Seat.PLAYER.value, 0)),
        opponent_wins=int(counts.get(Seat.OPPONENT.value, 0)),
        draws=int(counts.get("draw", 0)),
        unfinished=int(counts.get("unfinished", 0)),
        mean_turns=float(df["turns"].mean()) if len(df) else 0.0,
        player_win_rate=_calculate_confidence_interval(player_results),
    )
    logger.info("Simulated %d games: %s", num_games, report.to_dict())
    return report


def _calculate_confidence_interval(
    values: List[float], confidence: float = 0.95
) -> ConfidenceInterval:
    """
    Calculate a confidence interval for a set of values.

    Args:
        values: The values to calculate the confidence interval for
        confidence: The confidence level (e.g., 0.95 for 95% confidence)

    Returns:
        A ConfidenceInterval object
    """
    if len(values) < 2:
        mean = float(values[0]) if values else 0.0
        return ConfidenceInterval(mean, mean, confidence)

    mean = float(np.mean(values))
    std_err = stats.sem(values)

    margin = float(std_err * stats.t.ppf((1 + confidence) / 2, len(values) - 1))
    return ConfidenceInterval(mean - margin, mean + margin, confidence)
