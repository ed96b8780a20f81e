"""Two-coin observation channels.

A :class:`TwoCoinChannel` models an informant that tosses one of two biased
coins depending on the hidden secret and reports the outcome:

- secret is True  → coin 1 is tossed, heads with probability ``coin1``
- secret is False → coin 2 is tossed, heads with probability ``coin2``

Observing heads ("True") or tails ("False") updates the observer's belief
that the secret is True by Bayes' rule.

A :class:`ConditionalTwoCoinChannel` only reports when the observer's current
belief is exactly its ``condition``; at any other belief it abstains.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

from spymaster.rational import RationalLike, complement, require_probability


@dataclass(frozen=True)
class TwoCoinChannel:
    """Immutable pair of coin biases, both exact probabilities."""

    coin1: Fraction
    coin2: Fraction

    def __init__(self, coin1: RationalLike, coin2: RationalLike) -> None:
        object.__setattr__(self, "coin1", require_probability(coin1, "coin1"))
        object.__setattr__(self, "coin2", require_probability(coin2, "coin2"))

    def outcome_probability(self, prior: Fraction, outcome: bool) -> Fraction:
        """Probability of observing *outcome* for an observer believing *prior*.

        Examples:
            >>> TwoCoinChannel(1, 0).outcome_probability(Fraction(1, 3), True)
            Fraction(1, 3)
        """
        if outcome:
            return prior * self.coin1 + complement(prior) * self.coin2
        return prior * complement(self.coin1) + complement(prior) * complement(self.coin2)

    def a_posteriori(self, prior: Fraction, outcome: bool) -> Fraction:
        """Belief that the secret is True after observing *outcome*.

        Raises:
            ZeroDivisionError: if *outcome* cannot be observed from *prior*.
        """
        likelihood = self.coin1 if outcome else complement(self.coin1)
        return prior * likelihood / self.outcome_probability(prior, outcome)

    def __str__(self) -> str:
        return f"{self.coin1} {self.coin2}"


@dataclass(frozen=True)
class ConditionalTwoCoinChannel:
    """A channel that only fires when the current belief equals ``condition``."""

    condition: Fraction
    channel: TwoCoinChannel

    def __init__(self, condition: RationalLike, channel: TwoCoinChannel) -> None:
        object.__setattr__(self, "condition", require_probability(condition, "condition"))
        object.__setattr__(self, "channel", channel)

    def __str__(self) -> str:
        return f"{self.condition} {self.channel}"


def informant(condition: RationalLike, coin1: RationalLike, coin2: RationalLike) -> ConditionalTwoCoinChannel:
    """Shorthand for ``ConditionalTwoCoinChannel(condition, TwoCoinChannel(coin1, coin2))``."""
    return ConditionalTwoCoinChannel(condition, TwoCoinChannel(coin1, coin2))
